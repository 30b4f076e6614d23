"""Maps IntentType to its corresponding handler."""

from __future__ import annotations

from devpilot.collaborators.base import Advisor, CICDClient
from devpilot.engine.handlers.analysis import CostHandler, OptimizationHandler, PerformanceHandler
from devpilot.engine.handlers.auto_fix import AutoFixHandler
from devpilot.engine.handlers.base import IntentHandler
from devpilot.engine.handlers.deploy import DeployHandler
from devpilot.engine.handlers.schedule import ScheduleHandler
from devpilot.engine.handlers.static import (
    PIPELINE_CREATE_GUIDANCE,
    ROLLBACK_GUIDANCE,
    help_handler,
    not_implemented_handler,
    unknown_handler,
)
from devpilot.engine.handlers.status import StatusHandler
from devpilot.models.intent import IntentType
from devpilot.risk.scoring import RiskScoringEngine


class HandlerRegistry:
    def __init__(self, handlers: dict[IntentType, IntentHandler] | None = None) -> None:
        self._handlers: dict[IntentType, IntentHandler] = dict(handlers or {})

    @classmethod
    def default(
        cls,
        cicd: CICDClient,
        advisor: Advisor | None,
        risk_engine: RiskScoringEngine,
        triggered_by: str = "devpilot",
        timeout: float | None = None,
    ) -> HandlerRegistry:
        return cls(
            {
                IntentType.DEPLOY_REQUEST: DeployHandler(cicd, triggered_by, timeout),
                IntentType.STATUS_CHECK: StatusHandler(cicd, timeout),
                IntentType.OPTIMIZATION_REQUEST: OptimizationHandler(advisor, timeout),
                IntentType.COST_ANALYSIS: CostHandler(advisor, timeout),
                IntentType.PERFORMANCE_REPORT: PerformanceHandler(cicd, advisor, timeout),
                IntentType.AUTO_FIX: AutoFixHandler(cicd, advisor, timeout),
                IntentType.SCHEDULE_DEPLOYMENT: ScheduleHandler(risk_engine, timeout),
                IntentType.PIPELINE_CREATE: not_implemented_handler(PIPELINE_CREATE_GUIDANCE),
                IntentType.ROLLBACK_REQUEST: not_implemented_handler(ROLLBACK_GUIDANCE),
                IntentType.HELP_REQUEST: help_handler(),
                IntentType.UNKNOWN: unknown_handler(),
            }
        )

    def get(self, intent: IntentType) -> IntentHandler | None:
        return self._handlers.get(intent)

    def register(self, intent: IntentType, handler: IntentHandler) -> None:
        self._handlers[intent] = handler
