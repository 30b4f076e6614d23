"""Generative-model intent extraction."""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from devpilot.collaborators.base import GenerativeClient
from devpilot.exceptions import ExtractionError
from devpilot.models.intent import ENTITY_SLOTS, Entities, ExtractionResult, IntentType
from devpilot.parser.base import ExtractionStrategy
from devpilot.parser.json_extraction import find_json_object
from devpilot.parser.prompt_templates import EXTRACTION_PROMPT
from devpilot.parser.schemas import EXTRACTION_JSON_SCHEMA
from devpilot.timeouts import bounded

logger = logging.getLogger(__name__)

GENERATIVE_CONFIDENCE = 0.9


class GenerativeExtractor(ExtractionStrategy):
    def __init__(self, client: GenerativeClient, timeout: float | None = None) -> None:
        self._client = client
        self._timeout = timeout

    async def extract(self, text: str, context: str | None = None) -> ExtractionResult:
        if not text.strip():
            raise ExtractionError("Empty command")

        prompt = EXTRACTION_PROMPT.format(
            command=text,
            context=json.dumps(context) if context else "{}",
            slots=", ".join(ENTITY_SLOTS),
            schema=json.dumps(EXTRACTION_JSON_SCHEMA, indent=2),
        )

        try:
            reply = await bounded(
                self._client.generate(prompt), self._timeout, collaborator="generative"
            )
        except Exception as exc:
            raise ExtractionError(f"Generative client error: {exc}") from exc

        if not isinstance(reply, str):
            raise ExtractionError("Generative client returned non-text reply")

        data = find_json_object(reply)
        if data is None:
            raise ExtractionError("No JSON object found in generative reply")
        logger.debug("Generative extraction reply: %s", data)

        raw_intent = data.get("intent")
        try:
            intent = IntentType(str(raw_intent).strip().upper())
        except ValueError as exc:
            raise ExtractionError(f"Unknown intent in reply: {raw_intent!r}") from exc

        raw_entities = data.get("entities") or {}
        if not isinstance(raw_entities, dict):
            raise ExtractionError("Entities in reply are not an object")
        try:
            entities = Entities.model_validate(raw_entities)
        except ValidationError as exc:
            raise ExtractionError(f"Malformed entities in reply: {exc}") from exc

        return ExtractionResult(
            intent=intent,
            entities=entities,
            confidence=GENERATIVE_CONFIDENCE,
            source="generative",
        )
