"""Bounded awaiting of collaborator calls."""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

from devpilot.exceptions import CollaboratorTimeoutError

T = TypeVar("T")


async def bounded(
    awaitable: Awaitable[T],
    timeout: float | None,
    collaborator: str = "",
) -> T:
    if timeout is None or timeout <= 0:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout)
    except asyncio.TimeoutError as exc:
        label = collaborator or "collaborator"
        raise CollaboratorTimeoutError(
            f"{label} call timed out after {timeout:g}s",
            collaborator=collaborator,
        ) from exc
