"""Prompt template for generative intent extraction."""

from __future__ import annotations

EXTRACTION_PROMPT = """\
You are an AI DevOps assistant for CI/CD pipelines.
Analyze this command and extract the intent and entities.

Command: "{command}"
Context: {context}

Possible intents:
- DEPLOY_REQUEST: User wants to deploy code
- STATUS_CHECK: User wants to check pipeline status
- ROLLBACK_REQUEST: User wants to rollback
- OPTIMIZATION_REQUEST: User wants to optimize performance/costs
- PIPELINE_CREATE: User wants to create a new pipeline
- COST_ANALYSIS: User wants cost breakdown
- PERFORMANCE_REPORT: User wants performance metrics
- AUTO_FIX: User wants to fix failed jobs
- SCHEDULE_DEPLOYMENT: User wants to schedule deployment
- HELP_REQUEST: User needs help
- UNKNOWN: The command matches none of the above

Extract these entities, using null when absent: {slots}

Respond ONLY with valid JSON matching this schema:
{schema}
"""
