"""OpenRouter chat-completions client."""

from __future__ import annotations

import asyncio
import json
import re
from logging import getLogger
from typing import TYPE_CHECKING

from lifeboard.adapters.http_resilience import ResilientClient

from .schema import ChatCompletionResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from lifeboard.config.classifier import ClassifierConfig
    from lifeboard.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

COMPLETIONS_PATH = "chat/completions"

_FENCE_START = re.compile(r"^```(?:json)?\s*\n?", re.IGNORECASE)
_FENCE_END = re.compile(r"\n?```\s*$")


class ExternalServiceError(RuntimeError):
    """Raised when OpenRouter answers with something that is not the expected JSON."""


def strip_code_fences(content: str) -> str:
    """Remove a surrounding Markdown code fence, if any."""

    text = content.strip()
    text = _FENCE_START.sub("", text)
    return _FENCE_END.sub("", text).strip()


def parse_json_content(content: str | None) -> dict[str, object]:
    if content is None or not content.strip():
        raise ExternalServiceError("Empty completion content")
    try:
        payload = json.loads(strip_code_fences(content))
    except json.JSONDecodeError as exc:
        raise ExternalServiceError(f"Completion is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ExternalServiceError("Completion JSON is not an object")
    return payload


class OpenRouterClient:
    """Low-level HTTP client for JSON-answering chat completions."""

    def __init__(
        self,
        *,
        config: ClassifierConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._headers = {
            "Authorization": f"Bearer {config.api_key}",
            "Content-Type": "application/json",
        }

    def complete_json(
        self,
        *,
        model: str,
        system_prompt: str,
        payload: dict[str, object],
        temperature: float,
        max_tokens: int,
    ) -> dict[str, object]:
        """Send one completion request and return the decoded JSON answer."""

        return asyncio.run(
            self._complete_json_async(
                model=model,
                system_prompt=system_prompt,
                payload=payload,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        )

    async def _complete_json_async(
        self,
        *,
        model: str,
        system_prompt: str,
        payload: dict[str, object],
        temperature: float,
        max_tokens: int,
    ) -> dict[str, object]:
        body = {
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": json.dumps(payload, ensure_ascii=False)},
            ],
        }
        async with self._client_factory(self._resilience) as client:
            completion = await self._perform_request(client=client, body=body)
        log.debug("Completion from %s (%s)", completion.model or model, completion.id)
        return parse_json_content(completion.content)

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        body: dict[str, object],
    ) -> ChatCompletionResponse:
        if self._resilience.base_url is None:
            raise ExternalServiceError("Missing OpenRouter base_url in resilience configuration")
        response = await client.post(COMPLETIONS_PATH, json=body, headers=self._headers)
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict):
            raise ExternalServiceError("Unexpected OpenRouter response payload")

        return ChatCompletionResponse.model_validate(payload)


__all__ = ["ExternalServiceError", "OpenRouterClient", "parse_json_content", "strip_code_fences"]
