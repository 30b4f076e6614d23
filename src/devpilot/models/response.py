"""Handler outcomes and the response contract they are serialized into."""

from __future__ import annotations

import abc
import json
from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import BaseModel, Field

from devpilot.models.analysis import (
    CostReport,
    FailureAnalysis,
    OptimizationReport,
    TrendInsights,
)
from devpilot.models.cicd import Pipeline, PipelineMetrics, PipelineStatus
from devpilot.models.intent import IntentType
from devpilot.models.prediction import DeploymentSchedule

HELP_TEXT = """\
Here are some commands you can try:
• deploy to staging - Deploy the main branch to staging
• deploy feature-xyz to production - Deploy a specific branch
• check pipeline status - Get the status of the latest pipeline
• optimize my pipeline - Get optimization suggestions
• analyze my pipeline costs - Get cost breakdown and savings
• show performance report - Get performance metrics and AI insights
• fix failed job - Get AI suggestions to fix failures
• schedule deployment for tomorrow - Schedule optimal deployment time"""

UNKNOWN_TEXT = (
    "I didn't understand that command. Try: 'deploy to staging' or "
    "'check pipeline status' or ask for 'help'"
)

NO_FAILURES_TEXT = "No failed jobs found. Everything is running smoothly!"


class OutcomeBase(BaseModel, abc.ABC):
    executed: ClassVar[bool] = False

    @abc.abstractmethod
    def render(self) -> str:
        ...  # pragma: no cover

    def payload(self) -> Any:
        return None


class PipelineTriggered(OutcomeBase):
    executed: ClassVar[bool] = True
    action: Literal["pipeline_triggered"] = "pipeline_triggered"
    pipeline: Pipeline
    branch: str
    environment: str

    def render(self) -> str:
        return (
            f"Deployment initiated! Pipeline {self.pipeline.display_id} started "
            f"for {self.branch} → {self.environment}"
        )

    def payload(self) -> Any:
        return {"pipeline": self.pipeline.summary()}


class PipelineError(OutcomeBase):
    action: Literal["pipeline_error"] = "pipeline_error"
    errors: list[str]

    def render(self) -> str:
        return "\n".join(self.errors)


class StatusRetrieved(OutcomeBase):
    executed: ClassVar[bool] = True
    action: Literal["status_retrieved"] = "status_retrieved"
    status: PipelineStatus

    def render(self) -> str:
        return self.status.message

    def payload(self) -> Any:
        return self.status.model_dump(mode="json")


class OptimizationSuggested(OutcomeBase):
    executed: ClassVar[bool] = True
    action: Literal["optimization_suggested"] = "optimization_suggested"
    report: OptimizationReport

    def render(self) -> str:
        lines = [f"Found optimizations that can save {self.report.savings:g}%:"]
        lines.extend(self.report.recommendations)
        return "\n".join(lines)

    def payload(self) -> Any:
        return self.report.model_dump(mode="json", by_alias=True)


class CostAnalysisReport(OutcomeBase):
    executed: ClassVar[bool] = True
    action: Literal["cost_analysis"] = "cost_analysis"
    project: str
    report: CostReport

    def render(self) -> str:
        r = self.report
        recommendations = "\n".join(
            f"{i}. {rec}" for i, rec in enumerate(r.recommendations, 1)
        )
        return (
            f"Cost Analysis for {self.project}:\n"
            f"\n"
            f"Current monthly cost: ${r.current_cost:.2f}\n"
            f"Projected savings: ${r.potential_savings:.2f} ({r.savings_percentage:g}%)\n"
            f"\n"
            f"Top recommendations:\n"
            f"{recommendations or 'None'}\n"
            f"\n"
            f"Estimated ROI: {r.roi or 'unknown'}"
        )

    def payload(self) -> Any:
        return self.report.model_dump(mode="json", by_alias=True)


class PerformanceReport(OutcomeBase):
    executed: ClassVar[bool] = True
    action: Literal["performance_report"] = "performance_report"
    time_range: str
    metrics: PipelineMetrics
    insights: TrendInsights

    def render(self) -> str:
        m = self.metrics
        insights = "\n".join(self.insights.insights) or "None"
        anomalies = "\n".join(self.insights.anomalies) or "None"
        return (
            f"Performance Report ({self.time_range}):\n"
            f"\n"
            f"Pipeline Success Rate: {m.success_rate:g}%\n"
            f"Average Duration: {m.avg_duration:g} minutes\n"
            f"Total Runs: {m.total_runs}\n"
            f"\n"
            f"AI Insights:\n"
            f"{insights}\n"
            f"\n"
            f"Anomalies Detected:\n"
            f"{anomalies}"
        )

    def payload(self) -> Any:
        return {
            "report": self.metrics.model_dump(mode="json", by_alias=True),
            "aiInsights": self.insights.model_dump(mode="json", by_alias=True),
        }


class FixSuggested(OutcomeBase):
    executed: ClassVar[bool] = True
    action: Literal["fix_suggested"] = "fix_suggested"
    job_name: str
    analysis: FailureAnalysis

    def render(self) -> str:
        a = self.analysis
        text = (
            f'AI Fix Suggestion for job "{self.job_name}":\n'
            f"\n"
            f"Root Cause: {a.root_cause}\n"
            f"\n"
            f"Suggested Fix:\n"
            f"{a.recommendation}\n"
            f"\n"
            f"Code Changes:\n"
            f"```{a.language or 'yaml'}\n"
            f"{a.code}\n"
            f"```"
        )
        if a.confidence is not None:
            text += f"\n\nConfidence: {a.confidence:g}%"
        return text

    def payload(self) -> Any:
        return self.analysis.model_dump(mode="json", by_alias=True)


class NoFailures(OutcomeBase):
    executed: ClassVar[bool] = True
    action: Literal["no_failures"] = "no_failures"

    def render(self) -> str:
        return NO_FAILURES_TEXT


class DeploymentScheduled(OutcomeBase):
    executed: ClassVar[bool] = True
    action: Literal["deployment_scheduled"] = "deployment_scheduled"
    environment: str
    schedule: DeploymentSchedule

    def render(self) -> str:
        s = self.schedule
        return (
            f"Deployment Scheduled:\n"
            f"\n"
            f"Environment: {self.environment}\n"
            f"Optimal Time: {s.suggested_time.isoformat()}\n"
            f"Reason: {s.reason}\n"
            f"\n"
            f"Risk Assessment:\n"
            f"- Traffic Impact: {s.traffic_impact}\n"
            f"- Success Probability: {s.success_probability}%\n"
            f"- Rollback Time: {s.estimated_rollback_time} minutes"
        )

    def payload(self) -> Any:
        return self.schedule.model_dump(mode="json", by_alias=True)


class Help(OutcomeBase):
    executed: ClassVar[bool] = True
    action: Literal["help"] = "help"

    def render(self) -> str:
        return HELP_TEXT


class NotImplementedAction(OutcomeBase):
    action: Literal["not_implemented"] = "not_implemented"
    guidance: str

    def render(self) -> str:
        return self.guidance


class Unknown(OutcomeBase):
    action: Literal["unknown"] = "unknown"

    def render(self) -> str:
        return UNKNOWN_TEXT


class Error(OutcomeBase):
    action: Literal["error"] = "error"
    message: str

    def render(self) -> str:
        return self.message


Outcome = Annotated[
    Union[
        PipelineTriggered,
        PipelineError,
        StatusRetrieved,
        OptimizationSuggested,
        CostAnalysisReport,
        PerformanceReport,
        FixSuggested,
        NoFailures,
        DeploymentScheduled,
        Help,
        NotImplementedAction,
        Unknown,
        Error,
    ],
    Field(discriminator="action"),
]


class CommandResponse(BaseModel):
    intent: IntentType
    action: str
    message: str
    data: str | None = None
    executed: bool = False

    @classmethod
    def from_outcome(cls, intent: IntentType, outcome: OutcomeBase) -> CommandResponse:
        payload = outcome.payload()
        return cls(
            intent=intent,
            action=outcome.action,  # type: ignore[attr-defined]
            message=outcome.render(),
            data=json.dumps(payload) if payload is not None else None,
            executed=outcome.executed,
        )
