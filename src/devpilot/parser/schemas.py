"""JSON schema describing the generative extractor's expected reply."""

from __future__ import annotations

from devpilot.models.intent import ENTITY_SLOTS, IntentType

EXTRACTION_JSON_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "intent": {
            "type": "string",
            "enum": [i.value for i in IntentType],
            "description": "The classified intent.",
        },
        "entities": {
            "type": "object",
            "properties": {
                slot: {"type": ["string", "null"]} for slot in ENTITY_SLOTS
            },
            "required": list(ENTITY_SLOTS),
            "additionalProperties": False,
        },
        "confidence": {
            "type": "number",
            "description": "Confidence score between 0.0 and 1.0.",
        },
        "suggestedAction": {
            "type": "string",
            "description": "Specific action to take.",
        },
    },
    "required": ["intent", "entities"],
}
