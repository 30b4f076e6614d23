"""DEPLOY_REQUEST handler: trigger a pipeline on the CI/CD provider."""

from __future__ import annotations

import logging

from devpilot.collaborators.base import CICDClient
from devpilot.engine.handlers.base import DispatchRequest, IntentHandler
from devpilot.models.cicd import TriggerResult
from devpilot.models.response import Error, OutcomeBase, PipelineError, PipelineTriggered

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"
DEFAULT_ENVIRONMENT = "staging"
MISSING_PROJECT_MESSAGE = (
    'Please specify a valid project path (e.g., "username/project-name")'
)


class DeployHandler(IntentHandler):
    failure_prefix = "Deployment failed"

    def __init__(
        self,
        cicd: CICDClient,
        triggered_by: str = "devpilot",
        timeout: float | None = None,
    ) -> None:
        super().__init__(timeout)
        self._cicd = cicd
        self._triggered_by = triggered_by

    async def handle(self, request: DispatchRequest) -> OutcomeBase:
        project = request.explicit_project()
        if not project or project == request.default_project:
            return Error(message=MISSING_PROJECT_MESSAGE)

        branch = request.entities.branch or DEFAULT_BRANCH
        environment = request.entities.environment or DEFAULT_ENVIRONMENT
        logger.info("Deploying %s to %s in project %s", branch, environment, project)

        raw = await self._call(
            self._cicd.trigger_pipeline(
                project,
                branch,
                {
                    "ENVIRONMENT": environment,
                    "AI_OPTIMIZED": "true",
                    "TRIGGERED_BY": self._triggered_by,
                },
            ),
            collaborator="cicd",
        )
        result = TriggerResult.model_validate(raw)

        if result.errors:
            logger.info("Pipeline errors for %s: %s", project, result.errors)
            return PipelineError(errors=result.errors)
        if result.pipeline is None:
            return PipelineError(errors=["CI/CD provider returned no pipeline"])

        return PipelineTriggered(
            pipeline=result.pipeline, branch=branch, environment=environment
        )
