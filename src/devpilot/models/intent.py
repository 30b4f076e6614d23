"""Intent models: output of the command extractors."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class IntentType(str, enum.Enum):
    DEPLOY_REQUEST = "DEPLOY_REQUEST"
    STATUS_CHECK = "STATUS_CHECK"
    ROLLBACK_REQUEST = "ROLLBACK_REQUEST"
    OPTIMIZATION_REQUEST = "OPTIMIZATION_REQUEST"
    PIPELINE_CREATE = "PIPELINE_CREATE"
    COST_ANALYSIS = "COST_ANALYSIS"
    PERFORMANCE_REPORT = "PERFORMANCE_REPORT"
    AUTO_FIX = "AUTO_FIX"
    SCHEDULE_DEPLOYMENT = "SCHEDULE_DEPLOYMENT"
    HELP_REQUEST = "HELP_REQUEST"
    UNKNOWN = "UNKNOWN"


ENTITY_SLOTS: tuple[str, ...] = (
    "project",
    "branch",
    "environment",
    "jobId",
    "timeRange",
    "time",
)


class Entities(BaseModel):
    """Named slots pulled out of a command. Every slot is always present."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    project: str | None = None
    branch: str | None = None
    environment: str | None = None
    job_id: str | None = Field(default=None, alias="jobId")
    time_range: str | None = Field(default=None, alias="timeRange")
    time: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _normalize_slot(cls, value: Any) -> str | None:
        if value is None or isinstance(value, (dict, list)):
            return None
        if isinstance(value, bool):
            return str(value).lower()
        text = str(value).strip()
        if not text or text.lower() in ("null", "none"):
            return None
        return text

    def to_wire(self) -> dict[str, str | None]:
        return self.model_dump(by_alias=True)


class ExtractionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    intent: IntentType
    entities: Entities = Field(default_factory=Entities)
    confidence: float = Field(ge=0.0, le=1.0)
    source: str = ""
