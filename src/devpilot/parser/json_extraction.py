"""Locate a JSON object embedded in free-form model output."""

from __future__ import annotations

import json
from typing import Any

_DECODER = json.JSONDecoder()


def find_json_object(text: str) -> dict[str, Any] | None:
    """Return the first decodable JSON object in ``text``, or ``None``.

    Models often wrap their answer in prose or markdown fences, so every
    ``{`` is tried as a starting point until one decodes to a dict.
    """
    start = text.find("{")
    while start != -1:
        try:
            value, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, dict):
            return value
        start = text.find("{", start + 1)
    return None
