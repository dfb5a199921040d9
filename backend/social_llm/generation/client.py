"""HTTP client for the text generation backend.

One request per call: no retries, no backoff. Every failure mode
(connection refused, timeout, non-2xx status, unreadable body) surfaces
as a GenerationError so callers can treat it as "nothing generated".
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from social_llm.config import GenerationConfig, settings
from social_llm.generation import codec
from social_llm.generation.constants import ERROR_BODY_PREVIEW_CHARS, GENERATE_PATH

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (status {self.status_code})"
        return self.message


class GenerationClient:
    """Async client for ``POST {endpoint}/api/generate``.

    The underlying httpx.AsyncClient is created lazily and reused across
    calls. The endpoint is taken from the config snapshot on every call, so
    changing it in settings takes effect on the next request.
    """

    def __init__(
        self,
        timeout: httpx.Timeout | None = None,
        deadline_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout or httpx.Timeout(
            settings.REQUEST_TIMEOUT_SECONDS,
            connect=settings.CONNECT_TIMEOUT_SECONDS,
        )
        self._deadline = (
            deadline_seconds
            if deadline_seconds is not None
            else settings.GENERATION_DEADLINE_SECONDS
        )
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    @staticmethod
    def _url(config: GenerationConfig) -> str:
        return config.endpoint.rstrip("/") + GENERATE_PATH

    async def _post(self, config: GenerationConfig, body: bytes) -> httpx.Response:
        client = self._get_client()
        try:
            return await client.post(
                self._url(config),
                content=body,
                headers={"Content-Type": "application/json"},
            )
        except httpx.TimeoutException as exc:
            raise GenerationError(f"Request timed out: {exc!r}") from exc
        except httpx.HTTPError as exc:
            raise GenerationError(
                f"Request failed: {type(exc).__name__}: {exc}"
            ) from exc

    async def generate(self, config: GenerationConfig, prompt: str) -> str:
        """Generate flavor text for ``prompt``. Raises GenerationError."""
        request = codec.GenerationRequest.from_config(config, prompt)
        body = codec.encode(request)

        try:
            response = await asyncio.wait_for(
                self._post(config, body), timeout=self._deadline
            )
        except asyncio.TimeoutError as exc:
            raise GenerationError(
                f"No response within {self._deadline:.1f}s"
            ) from exc

        if not response.is_success:
            preview = response.text[:ERROR_BODY_PREVIEW_CHARS]
            raise GenerationError(
                f"Backend error: {response.reason_phrase} {preview}".strip(),
                status_code=response.status_code,
            )

        text = codec.decode(response.content)
        if text is None:
            raise GenerationError(
                "Response body had no generated text",
                status_code=response.status_code,
            )
        return text

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
