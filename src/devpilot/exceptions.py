"""Custom exception hierarchy for devpilot."""

from __future__ import annotations


class DevPilotError(Exception):
    """Base exception for all devpilot errors."""


class ExtractionError(DevPilotError):
    """Raised when a strategy cannot turn a command into an intent."""


class CollaboratorError(DevPilotError):
    """Raised when an external collaborator call fails."""

    def __init__(self, message: str, collaborator: str = "") -> None:
        super().__init__(message)
        self.collaborator = collaborator


class CollaboratorTimeoutError(CollaboratorError):
    """Raised when a collaborator call exceeds the request timeout."""


class PipelineTriggerError(CollaboratorError):
    """Raised when the CI/CD provider refuses to start a pipeline."""

    def __init__(self, errors: list[str], collaborator: str = "cicd") -> None:
        super().__init__("\n".join(errors), collaborator=collaborator)
        self.errors = errors
