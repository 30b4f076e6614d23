"""Typer CLI commands."""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from devpilot.cli.output import (
    print_error,
    print_extraction,
    print_info,
    print_prediction,
    print_schedule,
)
from devpilot.config.log_setup import configure_logging
from devpilot.config.settings import Settings
from devpilot.exceptions import DevPilotError
from devpilot.risk.scheduling import NEXT_MAINTENANCE_WINDOW

console = Console()
app = typer.Typer(name="devpilot", help="Natural-language DevOps command assistant.")


def _load_settings() -> Settings:
    try:
        settings = Settings()
    except Exception as exc:
        print_error(f"Failed to load settings: {exc}")
        raise typer.Exit(1)
    configure_logging(settings.log_level)
    return settings


@app.command()
def classify(
    command: str = typer.Argument(..., help="Natural language DevOps command"),
    context: Optional[str] = typer.Option(None, "--context", "-c", help="Project context"),
    offline: bool = typer.Option(False, "--offline", help="Use keyword matching only"),
) -> None:
    """Extract the intent and entities from a command."""
    from devpilot.main import build_extractor
    from devpilot.parser.intent_extractor import IntentExtractor

    settings = _load_settings()
    extractor = IntentExtractor() if offline else build_extractor(settings)
    if not extractor.has_primary and not offline:
        print_info("No OpenAI API key configured, using keyword matching.")

    try:
        result = asyncio.run(extractor.extract(command, context))
    except DevPilotError as exc:
        print_error(str(exc))
        raise typer.Exit(1)
    print_extraction(result)


@app.command()
def predict(
    project: str = typer.Argument(..., help="Project path, e.g. group/project"),
    ref: str = typer.Option("main", "--ref", "-r", help="Branch or tag"),
    files: int = typer.Option(0, "--files", "-f", min=0, help="Files changed in the commit"),
    hour: Optional[int] = typer.Option(None, "--hour", min=0, max=23, help="Hour of day (UTC)"),
    day: Optional[int] = typer.Option(
        None, "--day", min=0, max=6, help="Day of week, 0=Sunday"
    ),
) -> None:
    """Estimate duration, failure probability and cost of a pipeline run."""
    from devpilot.main import build_risk_engine
    from devpilot.models.prediction import PredictionInput

    settings = _load_settings()
    engine = build_risk_engine(settings)
    prediction = asyncio.run(
        engine.score_deployment(
            PredictionInput(
                project_path=project,
                ref=ref,
                commit_files_count=files,
                hour_of_day=hour,
                day_of_week=day,
            )
        )
    )
    print_prediction(prediction)


@app.command()
def schedule(
    project: str = typer.Argument(..., help="Project path, e.g. group/project"),
    environment: str = typer.Option("staging", "--env", "-e", help="Target environment"),
    at: str = typer.Option(
        NEXT_MAINTENANCE_WINDOW,
        "--at",
        help="tonight, tomorrow, next_maintenance_window or an ISO timestamp",
    ),
) -> None:
    """Suggest a low-risk deployment window."""
    from devpilot.main import build_risk_engine

    settings = _load_settings()
    engine = build_risk_engine(settings)
    result = asyncio.run(engine.calculate_optimal_deployment_time(project, environment, at))
    print_schedule(result)


@app.command(name="config")
def show_config() -> None:
    """Show current configuration."""
    settings = _load_settings()

    table_data = {
        "Model": settings.openai_model,
        "API Key": "set" if settings.openai_api_key else "not set",
        "Default Project": settings.default_project,
        "Request Timeout": f"{settings.request_timeout:g}s",
        "Triggered By": settings.triggered_by,
        "Log Level": settings.log_level,
    }

    table = Table(title="Configuration", show_header=False)
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value")
    for k, v in table_data.items():
        table.add_row(k, v)
    console.print(table)
