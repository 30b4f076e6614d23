"""Two-tier intent extraction: a primary strategy with a deterministic fallback."""

from __future__ import annotations

import logging

from devpilot.models.intent import ExtractionResult
from devpilot.parser.base import ExtractionStrategy
from devpilot.parser.keyword_classifier import KeywordClassifier

logger = logging.getLogger(__name__)


class IntentExtractor:
    """Runs ``primary`` and degrades to ``fallback`` on any failure.

    ``extract`` never raises as long as the fallback does not, and the
    default :class:`KeywordClassifier` fallback is total.
    """

    def __init__(
        self,
        primary: ExtractionStrategy | None = None,
        fallback: ExtractionStrategy | None = None,
    ) -> None:
        self._primary = primary
        self._fallback = fallback or KeywordClassifier()

    @property
    def has_primary(self) -> bool:
        return self._primary is not None

    async def extract(self, text: str, context: str | None = None) -> ExtractionResult:
        if self._primary is not None:
            try:
                return await self._primary.extract(text, context)
            except Exception as exc:
                logger.warning(
                    "Primary extraction failed, using %s: %s",
                    type(self._fallback).__name__,
                    exc,
                )
        return await self._fallback.extract(text, context)
