"""Prompt templates for the AI advisor analyses."""

from __future__ import annotations

OPTIMIZATION_PROMPT = """\
Analyze the CI/CD pipelines of the project "{project}" and suggest optimizations.
{focus}
Consider caching, parallel jobs, runner sizing and container image size.

Respond ONLY with JSON:
{{
  "originalCost": number,
  "optimizedCost": number,
  "savings": number (percentage saved),
  "recommendations": [string]
}}
"""

COST_PROMPT = """\
Analyze the CI/CD pipeline costs for the project "{project}" and provide
optimization recommendations.

Consider runner usage patterns, resource allocation efficiency, caching
opportunities, parallel job optimization and artifact storage costs.

Respond ONLY with JSON:
{{
  "currentCost": number,
  "potentialSavings": number,
  "savingsPercentage": number,
  "recommendations": [string],
  "roi": string,
  "breakdown": {{"compute": number, "storage": number, "network": number}}
}}
"""

PERFORMANCE_PROMPT = """\
Analyze these CI/CD pipeline performance metrics and provide insights.

Metrics: {metrics}

Identify trends, anomalies, bottlenecks and optimization opportunities.

Respond ONLY with JSON:
{{
  "insights": [string],
  "anomalies": [string],
  "bottlenecks": [string],
  "predictions": {{
    "expectedSuccessRate": number,
    "expectedAvgDuration": number,
    "riskFactors": [string]
  }},
  "recommendations": [string]
}}
"""

FAILURE_PROMPT = """\
Analyze this failed CI/CD job and provide a solution.

Job Configuration:
{config}

Job Log (last {log_lines} lines):
{log}

Respond ONLY with JSON:
{{
  "rootCause": string,
  "recommendation": string,
  "code": string (configuration or code change),
  "language": string (code block language, e.g. "yaml"),
  "confidence": number (0-100),
  "preventionStrategy": string
}}
"""
