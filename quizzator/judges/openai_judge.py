"""OpenAI chat-completions judge."""

from typing import Any, Optional

import httpx

from .base import DEFAULT_TIMEOUT, Judge


class OpenAIJudge(Judge):
    """Grades answers through the OpenAI chat completions endpoint."""

    name = "OpenAI"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = "https://api.openai.com/v1",
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        super().__init__(model, client=client, timeout=timeout)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    @property
    def _endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    @property
    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def _send_evaluation(self, client: httpx.AsyncClient, prompt: str) -> httpx.Response:
        return await client.post(
            self._endpoint,
            headers=self._headers,
            json={
                "model": self.model,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": 0.3,
                "response_format": {"type": "json_object"},
            },
        )

    async def _send_ping(self, client: httpx.AsyncClient) -> httpx.Response:
        return await client.post(
            self._endpoint,
            headers=self._headers,
            json={
                "model": self.model,
                "messages": [{"role": "user", "content": "test"}],
                "max_tokens": 5,
            },
        )

    def _extract_content(self, data: Any) -> str:
        return data["choices"][0]["message"]["content"]
