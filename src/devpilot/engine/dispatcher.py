"""Action dispatcher: turns an intent and its entities into a response."""

from __future__ import annotations

import logging

from devpilot.engine.handler_registry import HandlerRegistry
from devpilot.engine.handlers.base import DispatchRequest
from devpilot.models.intent import Entities, IntentType
from devpilot.models.response import CommandResponse, OutcomeBase, Unknown

logger = logging.getLogger(__name__)


class ActionDispatcher:
    def __init__(
        self, registry: HandlerRegistry, default_project: str = "default-project"
    ) -> None:
        self._registry = registry
        self._default_project = default_project

    async def dispatch(
        self,
        intent: IntentType,
        entities: Entities | None = None,
        raw_context: str | None = None,
    ) -> CommandResponse:
        request = DispatchRequest(
            intent=intent,
            entities=entities or Entities(),
            raw_context=raw_context,
            default_project=self._default_project,
        )

        handler = self._registry.get(intent)
        outcome: OutcomeBase
        if handler is None:
            logger.info("No handler registered for %s", intent.value)
            outcome = Unknown()
        else:
            outcome = await handler.run(request)

        response = CommandResponse.from_outcome(intent, outcome)
        logger.info(
            "Dispatched %s -> %s (executed=%s)",
            intent.value,
            response.action,
            response.executed,
        )
        return response
