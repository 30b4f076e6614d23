"""Rich display helpers for CLI output."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from devpilot.models.intent import ExtractionResult
from devpilot.models.prediction import DeploymentSchedule, Prediction

console = Console()


def print_extraction(result: ExtractionResult) -> None:
    table = Table(title="Parsed Command", show_header=False, expand=True)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("Intent", result.intent.value)
    table.add_row("Confidence", f"{result.confidence:.0%}")
    table.add_row("Source", result.source or "-")
    entities = {k: v for k, v in result.entities.to_wire().items() if v is not None}
    if entities:
        table.add_row("Entities", ", ".join(f"{k}={v}" for k, v in entities.items()))
    console.print(table)


def print_prediction(prediction: Prediction) -> None:
    table = Table(title="Deployment Prediction", show_header=False, expand=True)
    table.add_column("Metric", style="bold cyan")
    table.add_column("Value")
    table.add_row("Estimated Duration", f"{prediction.estimated_duration}s")
    table.add_row("Failure Probability", f"{prediction.failure_probability:.0%}")
    table.add_row("Estimated Cost", f"${prediction.estimated_cost:.2f}")
    table.add_row("Confidence", f"{prediction.confidence:.0%}")
    console.print(table)

    if prediction.risk_factors:
        risks = Table(title="Risk Factors", expand=True)
        risks.add_column("#", style="bold", width=3)
        risks.add_column("Risk Factor", style="yellow")
        for i, factor in enumerate(prediction.risk_factors, 1):
            risks.add_row(str(i), factor)
        console.print(risks)

    for recommendation in prediction.recommendations:
        print_info(f"→ {recommendation}")


def print_schedule(schedule: DeploymentSchedule) -> None:
    table = Table(title="Deployment Schedule", show_header=False, expand=True)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("Optimal Time", schedule.suggested_time.isoformat())
    table.add_row("Reason", schedule.reason)
    table.add_row("Traffic Impact", schedule.traffic_impact)
    table.add_row("Success Probability", f"{schedule.success_probability}%")
    table.add_row("Rollback Time", f"{schedule.estimated_rollback_time} minutes")
    if schedule.alternative_times:
        table.add_row(
            "Alternatives",
            ", ".join(t.isoformat() for t in schedule.alternative_times),
        )
    console.print(table)


def print_error(message: str) -> None:
    console.print(Panel(f"[red]{message}[/]", title="Error", border_style="red"))


def print_info(message: str) -> None:
    console.print(f"[dim]{message}[/]")
