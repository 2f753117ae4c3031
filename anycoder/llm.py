"""Minimal client for OpenAI-compatible chat completion endpoints."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import httpx


def _message_content(data: Any) -> str:
    """Text of the first choice, or an empty string when absent."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""


class LlmClient:
    """Sends chat messages to a model and returns the reply text."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        model: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self._transport = transport

    async def chat(self, messages: Iterable[Mapping[str, Any]]) -> str:
        """Post the messages and return the content of the first choice.

        Raises ``httpx.HTTPStatusError`` on a non-success response.
        """
        payload = {"model": self.model, "messages": [dict(m) for m in messages]}
        headers = {"Authorization": f"Bearer {self.api_key}"}
        async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
            response = await client.post(
                f"{self.base_url}/chat/completions", json=payload, headers=headers
            )
            response.raise_for_status()
            data = response.json()
        return _message_content(data)