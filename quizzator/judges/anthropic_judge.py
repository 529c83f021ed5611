"""Anthropic messages judge."""

from typing import Any, Optional

import httpx

from quizzator.errors import JudgeResponseError

from .base import DEFAULT_TIMEOUT, Judge

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicJudge(Judge):
    """Grades answers through the Anthropic messages endpoint."""

    name = "Anthropic"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://api.anthropic.com/v1",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        super().__init__(model, client=client, timeout=timeout)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    @property
    def _endpoint(self) -> str:
        return f"{self.base_url}/messages"

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
        }

    async def _send_evaluation(self, client: httpx.AsyncClient, prompt: str) -> httpx.Response:
        return await client.post(
            self._endpoint,
            headers=self._headers,
            json={
                "model": self.model,
                "max_tokens": 1024,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": 0.3,
            },
        )

    async def _send_ping(self, client: httpx.AsyncClient) -> httpx.Response:
        return await client.post(
            self._endpoint,
            headers=self._headers,
            json={
                "model": self.model,
                "max_tokens": 10,
                "messages": [{"role": "user", "content": "test"}],
            },
        )

    def _extract_content(self, data: Any) -> str:
        # Thinking or tool blocks may precede the text block
        for block in data["content"]:
            if block.get("type") == "text":
                return block["text"]
        raise JudgeResponseError(self.name, "unexpected response type from Anthropic")
