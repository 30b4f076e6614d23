"""OpenAI-backed generative text client."""

from __future__ import annotations

from openai import AsyncOpenAI

from devpilot.collaborators.base import GenerativeClient
from devpilot.config.settings import Settings
from devpilot.exceptions import CollaboratorError


class OpenAIGenerator(GenerativeClient):
    def __init__(
        self,
        settings: Settings,
        client: AsyncOpenAI | None = None,
        temperature: float = 0.0,
    ) -> None:
        self._settings = settings
        self._client = client or AsyncOpenAI(api_key=settings.openai_api_key)
        self._temperature = temperature

    async def generate(self, prompt: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._settings.openai_model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self._temperature,
            )
        except Exception as exc:
            raise CollaboratorError(f"OpenAI API error: {exc}", collaborator="openai") from exc

        if not response.choices:
            raise CollaboratorError("OpenAI returned no choices", collaborator="openai")
        content = response.choices[0].message.content
        if content is None:
            raise CollaboratorError("OpenAI returned empty content", collaborator="openai")
        return content
