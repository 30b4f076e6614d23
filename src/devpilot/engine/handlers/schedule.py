"""SCHEDULE_DEPLOYMENT handler."""

from __future__ import annotations

from devpilot.engine.handlers.base import DispatchRequest, IntentHandler
from devpilot.models.response import DeploymentScheduled, OutcomeBase
from devpilot.risk.scheduling import NEXT_MAINTENANCE_WINDOW
from devpilot.risk.scoring import RiskScoringEngine

DEFAULT_ENVIRONMENT = "staging"


class ScheduleHandler(IntentHandler):
    failure_prefix = "Scheduling failed"

    def __init__(self, risk_engine: RiskScoringEngine, timeout: float | None = None) -> None:
        super().__init__(timeout)
        self._risk_engine = risk_engine

    async def handle(self, request: DispatchRequest) -> OutcomeBase:
        environment = request.entities.environment or DEFAULT_ENVIRONMENT
        preferred = request.entities.time or NEXT_MAINTENANCE_WINDOW
        schedule = await self._risk_engine.calculate_optimal_deployment_time(
            request.project(), environment, preferred
        )
        return DeploymentScheduled(environment=environment, schedule=schedule)
