"""Abstract base for intent extraction strategies."""

from __future__ import annotations

import abc

from devpilot.models.intent import ExtractionResult


class ExtractionStrategy(abc.ABC):
    @abc.abstractmethod
    async def extract(self, text: str, context: str | None = None) -> ExtractionResult:
        """Classify ``text``; raise :class:`ExtractionError` on failure."""
