"""CI/CD collaborator result models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Pipeline(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str
    iid: str | None = None
    status: str = "pending"
    web_url: str = Field(default="", alias="webUrl")
    ref: str | None = None

    @property
    def display_id(self) -> str:
        return self.iid or self.id

    def summary(self) -> dict[str, str]:
        return {"id": self.id, "webUrl": self.web_url, "status": self.status}


class TriggerResult(BaseModel):
    pipeline: Pipeline | None = None
    errors: list[str] = Field(default_factory=list)


class PipelineStatus(BaseModel):
    status: str
    message: str


class FailedJob(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    name: str
    log: str = ""
    config: dict[str, Any] = Field(default_factory=dict)


class PipelineMetrics(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_runs: int = Field(default=0, alias="totalRuns")
    successful_runs: int = Field(default=0, alias="successfulRuns")
    failed_runs: int = Field(default=0, alias="failedRuns")
    success_rate: float = Field(default=0.0, alias="successRate")
    avg_duration: float = Field(default=0.0, alias="avgDuration")
