"""STATUS_CHECK handler."""

from __future__ import annotations

from devpilot.collaborators.base import CICDClient
from devpilot.engine.handlers.base import DispatchRequest, IntentHandler
from devpilot.models.cicd import PipelineStatus
from devpilot.models.response import OutcomeBase, StatusRetrieved


class StatusHandler(IntentHandler):
    failure_prefix = "Failed to check status"

    def __init__(self, cicd: CICDClient, timeout: float | None = None) -> None:
        super().__init__(timeout)
        self._cicd = cicd

    async def handle(self, request: DispatchRequest) -> OutcomeBase:
        raw = await self._call(
            self._cicd.get_pipeline_status(request.project()), collaborator="cicd"
        )
        return StatusRetrieved(status=PipelineStatus.model_validate(raw))
