"""
Resilient JSON-over-HTTP client for the remote vision service.

- Lazy ``httpx.AsyncClient`` (created on first call)
- Per-attempt timeout that cancels the in-flight request
- Linear backoff retries for transport-level failures only
- Classification of failures into the ``sentia.exceptions`` taxonomy
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from typing import Any

import httpx

from sentia.config.settings import Settings
from sentia.exceptions import (
    MalformedResponseError,
    NetworkError,
    RequestTimeoutError,
    TransportError,
    classify_status,
)
from sentia.infrastructure.http.image import ImageRef, encode_image

logger = logging.getLogger(__name__)

ERROR_BODY_MAX_CHARS = 200


@dataclass(frozen=True)
class RequestConfig:
    """Timeout and retry policy for a request.

    Attributes:
        timeout_ms: Deadline for each individual attempt.
        max_retries: Additional attempts after the first one.
        retry_delay_ms: Backoff unit; attempt ``n`` waits ``n * retry_delay_ms``.
    """

    timeout_ms: int = 30000
    max_retries: int = 2
    retry_delay_ms: int = 1000

    @classmethod
    def from_settings(cls, settings: Settings) -> RequestConfig:
        return cls(
            timeout_ms=settings.request_timeout_ms,
            max_retries=settings.max_retries,
            retry_delay_ms=settings.retry_delay_ms,
        )

    def with_overrides(self, **changes: Any) -> RequestConfig:
        return replace(self, **changes)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    def backoff_seconds(self, retry_number: int) -> float:
        return self.retry_delay_ms * retry_number / 1000


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:ERROR_BODY_MAX_CHARS] or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])[:ERROR_BODY_MAX_CHARS]
    return response.reason_phrase


class TransportClient:
    """HTTP client for the vision service endpoints.

    Usage:
        async with TransportClient("https://api.sentia.app/v1") as client:
            data = await client.post_image("/analyze/relevance", "photo.jpg", prompt="...")
    """

    def __init__(
        self,
        base_url: str,
        config: RequestConfig | None = None,
        max_image_size_bytes: int = 10 * 1024 * 1024,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._config = config or RequestConfig()
        self._max_image_size_bytes = max_image_size_bytes
        self._transport = transport
        self._sleep = sleep
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> TransportClient:
        return cls(
            base_url=settings.api_base_url,
            config=RequestConfig.from_settings(settings),
            max_image_size_bytes=settings.max_image_size_bytes,
            transport=transport,
        )

    @property
    def config(self) -> RequestConfig:
        return self._config

    async def __aenter__(self) -> TransportClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                timeout=self._config.timeout_seconds,
                transport=self._transport,
            )
            logger.info("Vision service HTTP client created for %s", self._base_url)
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def send(
        self,
        endpoint: str,
        payload: dict[str, Any],
        config: RequestConfig | None = None,
    ) -> dict[str, Any]:
        """POST ``payload`` to ``endpoint`` and return the decoded JSON object.

        Transport-level failures (no status received) are retried up to
        ``config.max_retries`` times, waiting ``retry_delay_ms * n`` before the
        n-th retry. Status-bearing failures are raised immediately.

        Raises:
            NetworkError: No response after all attempts.
            RequestTimeoutError: The last attempt exceeded its deadline.
            ApiError: The service answered with an error status (see ``classify_status``).
            MalformedResponseError: The body is not a JSON object.
        """
        cfg = config or self._config
        retry_number = 0

        while True:
            try:
                return await self._attempt(endpoint, payload, cfg)
            except TransportError as e:
                if retry_number >= cfg.max_retries:
                    logger.error(
                        f"{endpoint} failed after {retry_number + 1} attempt(s): {e.message}",
                        extra={"endpoint": endpoint, "attempt": retry_number + 1},
                    )
                    raise
                retry_number += 1
                delay = cfg.backoff_seconds(retry_number)
                logger.warning(
                    f"Attempt {retry_number}/{cfg.max_retries + 1} to {endpoint} failed: "
                    f"{type(e).__name__}: {e.message}. Retrying in {delay:.2f}s...",
                    extra={"endpoint": endpoint, "attempt": retry_number, "delay_seconds": delay},
                )
                await self._sleep(delay)

    async def _attempt(
        self,
        endpoint: str,
        payload: dict[str, Any],
        cfg: RequestConfig,
    ) -> dict[str, Any]:
        client = await self._get_client()
        timeout = cfg.timeout_seconds
        start_time = time.time()

        try:
            response = await asyncio.wait_for(
                client.post(endpoint, json=payload, timeout=timeout),
                timeout=timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise RequestTimeoutError(timeout, details={"endpoint": endpoint}) from e
        except httpx.TransportError as e:
            raise NetworkError(
                f"Network error calling {endpoint}: {e}", details={"endpoint": endpoint}
            ) from e

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            f"{endpoint} -> {response.status_code}",
            extra={"endpoint": endpoint, "status": response.status_code, "duration_ms": duration_ms},
        )

        if response.is_error:
            raise classify_status(response.status_code, _error_message(response))

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"{endpoint} returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"{endpoint} returned {type(data).__name__}, expected an object"
            )
        return data

    async def post_image(
        self,
        endpoint: str,
        image: ImageRef,
        config: RequestConfig | None = None,
        **fields: Any,
    ) -> dict[str, Any]:
        """Encode ``image`` and POST it together with extra ``fields``."""
        encoded = await encode_image(image, self._max_image_size_bytes)
        payload = {"image": encoded}
        payload.update({k: v for k, v in fields.items() if v is not None})
        return await self.send(endpoint, payload, config)
