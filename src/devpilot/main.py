"""Entry point and dependency wiring."""

from __future__ import annotations

from devpilot.cli.app import app
from devpilot.collaborators.ai_advisor import AIAdvisor
from devpilot.collaborators.base import (
    Advisor,
    AnalyticsClient,
    CICDClient,
    GenerativeClient,
    PredictionEndpoint,
)
from devpilot.collaborators.openai_generator import OpenAIGenerator
from devpilot.config.settings import Settings
from devpilot.engine.dispatcher import ActionDispatcher
from devpilot.engine.handler_registry import HandlerRegistry
from devpilot.parser.generative import GenerativeExtractor
from devpilot.parser.intent_extractor import IntentExtractor
from devpilot.parser.keyword_classifier import KeywordClassifier
from devpilot.risk.policy import RiskPolicy
from devpilot.risk.scoring import RiskScoringEngine
from devpilot.service import CommandService


def build_generator(settings: Settings) -> GenerativeClient | None:
    if not settings.openai_api_key:
        return None
    return OpenAIGenerator(settings)


def build_extractor(
    settings: Settings, generator: GenerativeClient | None = None
) -> IntentExtractor:
    generator = generator or build_generator(settings)
    primary = (
        GenerativeExtractor(generator, timeout=settings.request_timeout)
        if generator is not None
        else None
    )
    return IntentExtractor(primary=primary, fallback=KeywordClassifier())


def build_risk_engine(
    settings: Settings,
    analytics: AnalyticsClient | None = None,
    prediction_endpoint: PredictionEndpoint | None = None,
    policy: RiskPolicy | None = None,
) -> RiskScoringEngine:
    return RiskScoringEngine(
        analytics=analytics,
        endpoint=prediction_endpoint,
        policy=policy,
        timeout=settings.request_timeout,
    )


def build_service(
    cicd: CICDClient,
    settings: Settings | None = None,
    analytics: AnalyticsClient | None = None,
    prediction_endpoint: PredictionEndpoint | None = None,
    generator: GenerativeClient | None = None,
    advisor: Advisor | None = None,
    policy: RiskPolicy | None = None,
) -> CommandService:
    settings = settings or Settings()
    generator = generator or build_generator(settings)

    if advisor is None and generator is not None:
        advisor = AIAdvisor(generator)

    extractor = build_extractor(settings, generator)
    risk_engine = build_risk_engine(settings, analytics, prediction_endpoint, policy)
    registry = HandlerRegistry.default(
        cicd=cicd,
        advisor=advisor,
        risk_engine=risk_engine,
        triggered_by=settings.triggered_by,
        timeout=settings.request_timeout,
    )
    dispatcher = ActionDispatcher(registry, default_project=settings.default_project)

    return CommandService(
        extractor=extractor,
        dispatcher=dispatcher,
        risk_engine=risk_engine,
        cicd=cicd,
        advisor=advisor,
        timeout=settings.request_timeout,
    )


if __name__ == "__main__":
    app()
