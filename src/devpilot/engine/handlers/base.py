"""Abstract base for intent handlers and the request they receive."""

from __future__ import annotations

import abc
import logging
from typing import Awaitable, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from devpilot.models.intent import Entities, IntentType
from devpilot.models.response import Error, OutcomeBase
from devpilot.timeouts import bounded

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DispatchRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    intent: IntentType
    entities: Entities = Field(default_factory=Entities)
    raw_context: str | None = None
    default_project: str = "default-project"

    def explicit_project(self) -> str | None:
        context = self.raw_context.strip() if self.raw_context else None
        return self.entities.project or context or None

    def project(self) -> str:
        return self.explicit_project() or self.default_project


class IntentHandler(abc.ABC):
    failure_prefix: ClassVar[str] = "Command failed"

    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout

    async def run(self, request: DispatchRequest) -> OutcomeBase:
        try:
            return await self.handle(request)
        except Exception as exc:
            logger.exception("%s handler failed", request.intent.value)
            detail = str(exc) or type(exc).__name__
            return Error(message=f"{self.failure_prefix}: {detail}")

    @abc.abstractmethod
    async def handle(self, request: DispatchRequest) -> OutcomeBase:
        ...  # pragma: no cover

    def _no_advisor(self) -> Error:
        logger.warning("No advisor configured, cannot serve %s", type(self).__name__)
        return Error(message=f"{self.failure_prefix}: no advisor configured")

    async def _call(self, awaitable: Awaitable[T], collaborator: str) -> T:
        return await bounded(awaitable, self._timeout, collaborator=collaborator)
