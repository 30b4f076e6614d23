"""Command service: wires extract → dispatch and the companion entry points."""

from __future__ import annotations

import json
import logging

from devpilot.collaborators.base import Advisor, CICDClient
from devpilot.engine.dispatcher import ActionDispatcher
from devpilot.exceptions import CollaboratorError, PipelineTriggerError
from devpilot.models.analysis import OptimizationReport
from devpilot.models.cicd import Pipeline, TriggerResult
from devpilot.models.intent import Entities, IntentType
from devpilot.models.prediction import Anomaly, Prediction, PredictionInput
from devpilot.models.response import CommandResponse
from devpilot.parser.intent_extractor import IntentExtractor
from devpilot.risk.scoring import RiskScoringEngine
from devpilot.timeouts import bounded

logger = logging.getLogger(__name__)


class CommandService:
    def __init__(
        self,
        extractor: IntentExtractor,
        dispatcher: ActionDispatcher,
        risk_engine: RiskScoringEngine,
        cicd: CICDClient,
        advisor: Advisor | None = None,
        timeout: float | None = None,
    ) -> None:
        self._extractor = extractor
        self._dispatcher = dispatcher
        self._risk_engine = risk_engine
        self._cicd = cicd
        self._advisor = advisor
        self._timeout = timeout

    async def process_command(
        self, command: str, context: str | None = None
    ) -> CommandResponse:
        logger.info("Processing command: %r", command)

        # 1. Extract intent and entities
        result = await self._extractor.extract(command, context)
        logger.debug(
            "Extracted %s via %s: %s",
            result.intent.value,
            result.source,
            result.entities.to_wire(),
        )

        # 2. Dispatch to the matching handler
        return await self._dispatcher.dispatch(result.intent, result.entities, context)

    async def predict_pipeline_outcome(
        self,
        project_path: str,
        ref: str,
        commit_files_count: int = 0,
        hour_of_day: int | None = None,
        day_of_week: int | None = None,
    ) -> Prediction:
        return await self._risk_engine.score_deployment(
            PredictionInput(
                project_path=project_path,
                ref=ref,
                commit_files_count=commit_files_count,
                hour_of_day=hour_of_day,
                day_of_week=day_of_week,
            )
        )

    async def get_anomalies(self, project_id: str) -> list[Anomaly]:
        return await self._risk_engine.detect_anomalies(project_id)

    async def trigger_auto_fix(self, project_path: str, job_id: str) -> CommandResponse:
        return await self._dispatcher.dispatch(
            IntentType.AUTO_FIX,
            Entities(project=project_path, job_id=job_id),
        )

    async def schedule_deployment(
        self,
        project_path: str,
        ref: str,
        environment: str,
        preferred_time: str | None = None,
    ) -> CommandResponse:
        return await self._dispatcher.dispatch(
            IntentType.SCHEDULE_DEPLOYMENT,
            Entities(
                project=project_path,
                branch=ref,
                environment=environment,
                time=preferred_time,
            ),
        )

    async def execute_pipeline(
        self,
        project_path: str,
        branch: str | None = None,
        variables: str | dict[str, str] | None = None,
    ) -> Pipeline:
        """Trigger a pipeline directly. Errors are logged and re-raised."""
        try:
            if isinstance(variables, str):
                variables = json.loads(variables)
            raw = await bounded(
                self._cicd.trigger_pipeline(project_path, branch or "main", variables or {}),
                self._timeout,
                collaborator="cicd",
            )
            result = TriggerResult.model_validate(raw)
            if result.errors:
                raise PipelineTriggerError(result.errors)
            if result.pipeline is None:
                raise PipelineTriggerError(["CI/CD provider returned no pipeline"])
            return result.pipeline
        except Exception:
            logger.exception("Execute pipeline error for %s", project_path)
            raise

    async def optimize_pipeline(
        self, project_path: str, pipeline_id: str, optimization_type: str
    ) -> OptimizationReport:
        """Run an optimization analysis directly. Errors are logged and re-raised."""
        try:
            if self._advisor is None:
                raise CollaboratorError("No advisor configured", collaborator="advisor")
            raw = await bounded(
                self._advisor.optimize_pipeline(project_path, pipeline_id, optimization_type),
                self._timeout,
                collaborator="advisor",
            )
            return OptimizationReport.model_validate(raw)
        except Exception:
            logger.exception("Optimize pipeline error for %s", project_path)
            raise
