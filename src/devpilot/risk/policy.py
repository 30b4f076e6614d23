"""Risk policy: additive rules and the constants the heuristic engine uses."""

from __future__ import annotations

import abc

from pydantic import BaseModel, Field

from devpilot.models.prediction import FRIDAY, SATURDAY, SUNDAY


class RiskContext(BaseModel):
    """Situational inputs a rule looks at. ``day_of_week`` is 0=Sunday."""

    commit_files_count: int = Field(default=0, ge=0)
    hour_of_day: int = Field(ge=0, le=23)
    day_of_week: int = Field(ge=0, le=6)


class Adjustment(BaseModel):
    duration_factor: float = 1.0
    probability_delta: float = 0.0
    factor: str
    recommendation: str


class RiskDelta(BaseModel):
    duration_factor: float = 1.0
    probability_delta: float = 0.0
    risk_factors: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class RiskRule(abc.ABC):
    @abc.abstractmethod
    def evaluate(self, context: RiskContext) -> Adjustment | None:
        ...  # pragma: no cover


class LargeChangeRule(RiskRule):
    def __init__(
        self, threshold: int = 50, duration_factor: float = 1.5, penalty: float = 0.10
    ) -> None:
        self.threshold = threshold
        self.duration_factor = duration_factor
        self.penalty = penalty

    def evaluate(self, context: RiskContext) -> Adjustment | None:
        if context.commit_files_count <= self.threshold:
            return None
        return Adjustment(
            duration_factor=self.duration_factor,
            probability_delta=self.penalty,
            factor="Large number of files changed",
            recommendation="Consider breaking into smaller commits",
        )


class FridayRule(RiskRule):
    def __init__(self, penalty: float = 0.15) -> None:
        self.penalty = penalty

    def evaluate(self, context: RiskContext) -> Adjustment | None:
        if context.day_of_week != FRIDAY:
            return None
        return Adjustment(
            probability_delta=self.penalty,
            factor="Friday deployment - historically higher failure rate",
            recommendation="Consider deploying on Monday-Thursday",
        )


class LateDayRule(RiskRule):
    def __init__(self, start_hour: int = 16, penalty: float = 0.10) -> None:
        self.start_hour = start_hour
        self.penalty = penalty

    def evaluate(self, context: RiskContext) -> Adjustment | None:
        if context.hour_of_day < self.start_hour:
            return None
        return Adjustment(
            probability_delta=self.penalty,
            factor="Late day deployment",
            recommendation="Deploy earlier in the day for better support coverage",
        )


class WeekendRule(RiskRule):
    def evaluate(self, context: RiskContext) -> Adjustment | None:
        if context.day_of_week not in (SATURDAY, SUNDAY):
            return None
        return Adjustment(
            factor="Weekend deployment - limited support available",
            recommendation="Schedule for business hours if possible",
        )


def default_rules() -> list[RiskRule]:
    return [LargeChangeRule(), FridayRule(), LateDayRule(), WeekendRule()]


class RiskPolicy:
    """Tunable knobs of the heuristic engine.

    Swap rules or constants here to recalibrate scoring without touching
    the engine or the dispatcher.
    """

    def __init__(
        self,
        rules: list[RiskRule] | None = None,
        default_duration: float = 600.0,
        default_failure_probability: float = 0.1,
        max_failure_probability: float = 0.95,
        cost_per_hour: float = 0.10,
        overhead_cost: float = 0.02,
        well_sampled_size: int = 10,
    ) -> None:
        self.rules = rules if rules is not None else default_rules()
        self.default_duration = default_duration
        self.default_failure_probability = default_failure_probability
        self.max_failure_probability = max_failure_probability
        self.cost_per_hour = cost_per_hour
        self.overhead_cost = overhead_cost
        self.well_sampled_size = well_sampled_size

    def evaluate(self, context: RiskContext) -> RiskDelta:
        delta = RiskDelta()
        # Every rule runs; adjustments accumulate.
        for rule in self.rules:
            adjustment = rule.evaluate(context)
            if adjustment is None:
                continue
            delta.duration_factor *= adjustment.duration_factor
            delta.probability_delta += adjustment.probability_delta
            delta.risk_factors.append(adjustment.factor)
            delta.recommendations.append(adjustment.recommendation)
        return delta

    def clamp(self, probability: float) -> float:
        return min(max(probability, 0.0), self.max_failure_probability)

    def estimate_cost(self, duration_seconds: float) -> float:
        return (duration_seconds / 3600) * self.cost_per_hour + self.overhead_cost
