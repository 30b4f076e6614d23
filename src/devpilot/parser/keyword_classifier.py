"""Deterministic keyword classifier: the no-I/O extraction tier."""

from __future__ import annotations

import re

from devpilot.models.intent import Entities, ExtractionResult, IntentType
from devpilot.parser.base import ExtractionStrategy

KEYWORD_CONFIDENCE = 0.5

_ENVIRONMENT_RE = re.compile(r"\b(staging|production|prod|development|dev)\b")
_ENVIRONMENT_ALIASES = {"prod": "production", "development": "dev"}
_BRANCH_RE = re.compile(
    r"\bbranch\s+(?!(?:to|into|on|onto|in|for|from|and|the)\b)([^\s,;]+)", re.IGNORECASE
)
_FEATURE_BRANCH_RE = re.compile(r"(?<![\w-])(feature[-/][^\s,;]+)", re.IGNORECASE)
_PROJECT_RE = re.compile(
    r"\b(?:in|for|on|project)\s+(?!feature[-/])([\w.-]+(?:/[\w.-]+)+)", re.IGNORECASE
)
_JOB_RE = re.compile(r"\bjob\s+#?(\d+)\b")
_TIME_RANGES = (
    ("last week", "last_7_days"),
    ("last month", "last_30_days"),
    ("today", "today"),
)
_SCHEDULE_TIMES = (
    ("tomorrow", "tomorrow"),
    ("tonight", "tonight"),
    ("maintenance window", "next_maintenance_window"),
)


def _contains_any(text: str, *words: str) -> bool:
    return any(word in text for word in words)


def _match_intent(lowered: str) -> IntentType:
    # First match wins.
    if "deploy" in lowered:
        return IntentType.DEPLOY_REQUEST
    if "status" in lowered:
        return IntentType.STATUS_CHECK
    if "create" in lowered and "pipeline" in lowered:
        return IntentType.PIPELINE_CREATE
    if "rollback" in lowered:
        return IntentType.ROLLBACK_REQUEST
    if _contains_any(lowered, "optimize", "slow"):
        return IntentType.OPTIMIZATION_REQUEST
    if _contains_any(lowered, "cost", "expensive"):
        return IntentType.COST_ANALYSIS
    if _contains_any(lowered, "performance", "report"):
        return IntentType.PERFORMANCE_REPORT
    if _contains_any(lowered, "fix", "failed"):
        return IntentType.AUTO_FIX
    if "schedule" in lowered:
        return IntentType.SCHEDULE_DEPLOYMENT
    if "help" in lowered:
        return IntentType.HELP_REQUEST
    return IntentType.UNKNOWN


def _environment(lowered: str) -> str | None:
    match = _ENVIRONMENT_RE.search(lowered)
    if match is None:
        return None
    return _ENVIRONMENT_ALIASES.get(match.group(1), match.group(1))


def _branch(text: str) -> str | None:
    match = _BRANCH_RE.search(text) or _FEATURE_BRANCH_RE.search(text)
    return match.group(1) if match else None


def _first_phrase(lowered: str, table: tuple[tuple[str, str], ...]) -> str | None:
    for phrase, value in table:
        if phrase in lowered:
            return value
    return None


def classify(text: str) -> ExtractionResult:
    """Classify ``text`` using fixed keyword rules. Pure and total."""
    lowered = text.lower()
    intent = _match_intent(lowered)

    slots: dict[str, str | None] = {}
    project = _PROJECT_RE.search(text)
    if project:
        slots["project"] = project.group(1)

    if intent == IntentType.DEPLOY_REQUEST:
        slots["environment"] = _environment(lowered)
        slots["branch"] = _branch(text)
    elif intent == IntentType.PERFORMANCE_REPORT:
        slots["time_range"] = _first_phrase(lowered, _TIME_RANGES)
    elif intent == IntentType.AUTO_FIX:
        job = _JOB_RE.search(lowered)
        slots["job_id"] = job.group(1) if job else None
    elif intent == IntentType.SCHEDULE_DEPLOYMENT:
        slots["environment"] = _environment(lowered)
        slots["time"] = _first_phrase(lowered, _SCHEDULE_TIMES)

    return ExtractionResult(
        intent=intent,
        entities=Entities(**slots),
        confidence=KEYWORD_CONFIDENCE,
        source="keyword",
    )


class KeywordClassifier(ExtractionStrategy):
    async def extract(self, text: str, context: str | None = None) -> ExtractionResult:
        return classify(text)
