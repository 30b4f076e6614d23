"""AUTO_FIX handler: locate a failed job and ask for a fix."""

from __future__ import annotations

from devpilot.collaborators.base import Advisor, CICDClient
from devpilot.engine.handlers.base import DispatchRequest, IntentHandler
from devpilot.models.analysis import FailureAnalysis
from devpilot.models.cicd import FailedJob
from devpilot.models.response import Error, FixSuggested, NoFailures, OutcomeBase


class AutoFixHandler(IntentHandler):
    failure_prefix = "Auto-fix analysis failed"

    def __init__(
        self, cicd: CICDClient, advisor: Advisor | None, timeout: float | None = None
    ) -> None:
        super().__init__(timeout)
        self._cicd = cicd
        self._advisor = advisor

    async def handle(self, request: DispatchRequest) -> OutcomeBase:
        project = request.project()
        job_id = request.entities.job_id

        if job_id:
            raw_job = await self._call(self._cicd.get_job(project, job_id), collaborator="cicd")
            if raw_job is None:
                return Error(message=f"Job {job_id} not found in {project}")
        else:
            raw_job = await self._call(
                self._cicd.get_last_failed_job(project), collaborator="cicd"
            )
            if raw_job is None:
                return NoFailures()

        if self._advisor is None:
            return self._no_advisor()

        job = FailedJob.model_validate(raw_job)
        raw_fix = await self._call(
            self._advisor.analyze_failure(job.log, job.config), collaborator="advisor"
        )
        return FixSuggested(job_name=job.name, analysis=FailureAnalysis.model_validate(raw_fix))
