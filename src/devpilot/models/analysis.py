"""Advisor result models: AI generated analyses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OptimizationReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    original_cost: float = Field(default=0.0, alias="originalCost")
    optimized_cost: float = Field(default=0.0, alias="optimizedCost")
    savings: float = 0.0
    recommendations: list[str] = Field(default_factory=list)


class CostBreakdown(BaseModel):
    compute: float = 0.0
    storage: float = 0.0
    network: float = 0.0


class CostReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_cost: float = Field(default=0.0, alias="currentCost")
    potential_savings: float = Field(default=0.0, alias="potentialSavings")
    savings_percentage: float = Field(default=0.0, alias="savingsPercentage")
    recommendations: list[str] = Field(default_factory=list)
    roi: str = ""
    breakdown: CostBreakdown | None = None


class TrendPredictions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    expected_success_rate: float | None = Field(default=None, alias="expectedSuccessRate")
    expected_avg_duration: float | None = Field(default=None, alias="expectedAvgDuration")
    risk_factors: list[str] = Field(default_factory=list, alias="riskFactors")


class TrendInsights(BaseModel):
    insights: list[str] = Field(default_factory=list)
    anomalies: list[str] = Field(default_factory=list)
    bottlenecks: list[str] = Field(default_factory=list)
    predictions: TrendPredictions | None = None
    recommendations: list[str] = Field(default_factory=list)


class FailureAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    root_cause: str = Field(default="Unable to determine", alias="rootCause")
    recommendation: str = "Check job logs for more details"
    code: str = ""
    language: str | None = None
    confidence: float | None = None
    prevention_strategy: str = Field(default="", alias="preventionStrategy")
