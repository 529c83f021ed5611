"""Ollama local-generation judge."""

from typing import Any, Optional

import httpx

from .base import DEFAULT_TIMEOUT, Judge


class OllamaJudge(Judge):
    """Grades answers with a model served by a local Ollama instance."""

    name = "Ollama"

    def __init__(
        self,
        base_url: str,
        model: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        super().__init__(model, client=client, timeout=timeout)
        self.base_url = base_url.rstrip("/")

    async def _send_evaluation(self, client: httpx.AsyncClient, prompt: str) -> httpx.Response:
        return await client.post(
            f"{self.base_url}/api/generate",
            headers={"Content-Type": "application/json"},
            json={
                "model": self.model,
                "prompt": prompt,
                "stream": False,
                "format": "json",
            },
        )

    async def _send_ping(self, client: httpx.AsyncClient) -> httpx.Response:
        return await client.get(f"{self.base_url}/api/tags")

    def _extract_content(self, data: Any) -> str:
        # The generated text is itself the JSON verdict
        return data["response"]
