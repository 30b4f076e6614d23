"""Handlers answering with a fixed outcome and no collaborator calls."""

from __future__ import annotations

from devpilot.engine.handlers.base import DispatchRequest, IntentHandler
from devpilot.models.response import Help, NotImplementedAction, OutcomeBase, Unknown

PIPELINE_CREATE_GUIDANCE = (
    'Pipeline creation is not implemented yet. Try: "deploy to staging" instead.'
)
ROLLBACK_GUIDANCE = (
    "Rollback functionality is coming soon. For now, you can manually revert "
    "commits in your CI/CD provider."
)


class StaticHandler(IntentHandler):
    def __init__(self, outcome: OutcomeBase) -> None:
        super().__init__()
        self._outcome = outcome

    async def handle(self, request: DispatchRequest) -> OutcomeBase:
        return self._outcome.model_copy()


def help_handler() -> StaticHandler:
    return StaticHandler(Help())


def unknown_handler() -> StaticHandler:
    return StaticHandler(Unknown())


def not_implemented_handler(guidance: str) -> StaticHandler:
    return StaticHandler(NotImplementedAction(guidance=guidance))
