"""Advisor that asks a generative model for pipeline analyses."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from devpilot.collaborators.advisor_prompts import (
    COST_PROMPT,
    FAILURE_PROMPT,
    OPTIMIZATION_PROMPT,
    PERFORMANCE_PROMPT,
)
from devpilot.collaborators.base import Advisor, GenerativeClient
from devpilot.models.analysis import (
    CostReport,
    FailureAnalysis,
    OptimizationReport,
    TrendInsights,
    TrendPredictions,
)
from devpilot.models.cicd import PipelineMetrics
from devpilot.parser.json_extraction import find_json_object

logger = logging.getLogger(__name__)

LOG_TAIL_LINES = 100

DEFAULT_OPTIMIZATION = OptimizationReport(
    original_cost=100.0,
    optimized_cost=40.0,
    savings=60.0,
    recommendations=[
        "Use spot instances for non-critical jobs",
        "Enable caching for dependencies",
        "Parallelize test execution",
        "Use smaller container images",
    ],
)

DEFAULT_COST = CostReport(
    current_cost=100.0,
    potential_savings=40.0,
    savings_percentage=40.0,
    recommendations=[
        "Enable advanced caching strategies",
        "Use spot instances for non-critical jobs",
        "Optimize Docker image layers",
    ],
    roi="2 months",
)

DEFAULT_INSIGHTS = TrendInsights(
    insights=["Pipeline performance is stable"],
    anomalies=[],
    bottlenecks=["Test stage taking 40% of total time"],
    predictions=TrendPredictions(expected_success_rate=95, expected_avg_duration=12),
    recommendations=["Consider parallelizing tests"],
)

DEFAULT_FAILURE = FailureAnalysis(
    root_cause="Unable to determine",
    recommendation="Check job logs for more details",
    prevention_strategy="Add better error handling",
)


class AIAdvisor(Advisor):
    """Analyses backed by a :class:`GenerativeClient`.

    Transport errors propagate to the caller. A reply without usable JSON
    yields the matching ``DEFAULT_*`` report instead.
    """

    def __init__(self, generator: GenerativeClient) -> None:
        self._generator = generator

    async def analyze_optimizations(self, project_path: str) -> OptimizationReport:
        prompt = OPTIMIZATION_PROMPT.format(project=project_path, focus="")
        return await self._ask(prompt, OptimizationReport, DEFAULT_OPTIMIZATION)

    async def optimize_pipeline(
        self, project_path: str, pipeline_id: str, optimization_type: str
    ) -> OptimizationReport:
        focus = f"Focus on pipeline {pipeline_id}, optimizing for {optimization_type}.\n"
        prompt = OPTIMIZATION_PROMPT.format(project=project_path, focus=focus)
        return await self._ask(prompt, OptimizationReport, DEFAULT_OPTIMIZATION)

    async def analyze_pipeline_costs(self, project_path: str) -> CostReport:
        prompt = COST_PROMPT.format(project=project_path)
        return await self._ask(prompt, CostReport, DEFAULT_COST)

    async def analyze_performance_trends(self, metrics: PipelineMetrics) -> TrendInsights:
        prompt = PERFORMANCE_PROMPT.format(
            metrics=metrics.model_dump_json(by_alias=True, indent=2)
        )
        return await self._ask(prompt, TrendInsights, DEFAULT_INSIGHTS)

    async def analyze_failure(
        self, job_log: str, job_config: dict[str, Any]
    ) -> FailureAnalysis:
        tail = "\n".join(job_log.splitlines()[-LOG_TAIL_LINES:])
        prompt = FAILURE_PROMPT.format(
            config=json.dumps(job_config, indent=2, default=str),
            log_lines=LOG_TAIL_LINES,
            log=tail,
        )
        return await self._ask(prompt, FailureAnalysis, DEFAULT_FAILURE)

    async def _ask(self, prompt: str, model: type[Any], default: BaseModel) -> Any:
        text = await self._generator.generate(prompt)
        data = find_json_object(text)
        if data is None:
            logger.warning("No JSON in %s reply, using defaults", model.__name__)
            return default.model_copy(deep=True)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.warning("Invalid %s reply (%s), using defaults", model.__name__, exc)
            return default.model_copy(deep=True)
