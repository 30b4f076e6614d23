"""Prediction, scheduling and analytics warehouse models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

FRIDAY = 5
SATURDAY = 6
SUNDAY = 0


class PredictionInput(BaseModel):
    """Inputs for a pipeline outcome prediction. ``day_of_week`` is 0=Sunday."""

    model_config = ConfigDict(populate_by_name=True)

    project_path: str = Field(alias="projectPath")
    ref: str = "main"
    commit_files_count: int = Field(default=0, ge=0, alias="commitFilesCount")
    hour_of_day: int | None = Field(default=None, ge=0, le=23, alias="hourOfDay")
    day_of_week: int | None = Field(default=None, ge=0, le=6, alias="dayOfWeek")


class Prediction(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    estimated_duration: int = Field(alias="estimatedDuration")
    failure_probability: float = Field(ge=0.0, le=0.95, alias="failureProbability")
    estimated_cost: float = Field(ge=0.0, alias="estimatedCost")
    confidence: float = Field(ge=0.0, le=1.0)
    risk_factors: list[str] = Field(default_factory=list, alias="riskFactors")
    recommendations: list[str] = Field(default_factory=list)


class HistoricalDuration(BaseModel):
    avg_duration: float | None = None
    sample_size: int = 0
    stddev_duration: float | None = None


class FailurePattern(BaseModel):
    hour_of_day: int
    day_of_week: int
    total_runs: int = 0
    failures: int = 0
    failure_rate: float = 0.0


class PipelineTrend(BaseModel):
    week: str
    total_runs: int = 0
    avg_duration: float = 0.0
    success_rate: float = 0.0
    avg_cost: float | None = None
    prev_week_duration: float | None = None
    prev_week_success_rate: float | None = None

    @field_validator("week", mode="before")
    @classmethod
    def _week_as_text(cls, value: object) -> str:
        if isinstance(value, datetime):
            return value.date().isoformat()
        return str(value)


class Anomaly(BaseModel):
    type: str
    week: str
    change: float
    message: str
    severity: str


class ModelEstimate(BaseModel):
    """Reply of a trained prediction endpoint. Numbers only, no coercion from text."""

    model_config = ConfigDict(strict=True, extra="ignore")

    duration: float | None = Field(default=None, ge=0.0)
    failure_probability: float | None = Field(default=None, ge=0.0)


class DeploymentSchedule(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    suggested_time: datetime = Field(alias="suggestedTime")
    reason: str
    traffic_impact: str = Field(alias="trafficImpact")
    success_probability: int = Field(ge=0, le=100, alias="successProbability")
    estimated_rollback_time: int = Field(alias="estimatedRollbackTime")
    alternative_times: list[datetime] = Field(default_factory=list, alias="alternativeTimes")
