"""
Indicators Service Gateway

aiohttp client for the upstream indicators service.

Each call runs under a deadline. When it fires, asyncio.wait_for cancels the
in-flight request, which closes its connection, and the call fails with stage
``timeout``. Nothing is retried and no session outlives a single call.
"""

import asyncio
import json
import logging
from typing import Any, Optional, Sequence

import aiohttp
from pydantic import ValidationError

from bff.schemas.analyze import EnsureResult, Timeframe
from bff.services.base import ExternalAPIError, PipelineStage
from bff.services.upstream.interface import UpstreamGatewayInterface

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 8.0


class IndicatorsGateway(UpstreamGatewayInterface):
    """Gateway to the upstream indicators service."""

    def __init__(self, base_url: str, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    def _error(
        self, step: PipelineStage, message: str, status_code: Optional[int] = None
    ) -> ExternalAPIError:
        return ExternalAPIError(step, message, status_code=status_code, service_name=self.name)

    async def ensure(
        self,
        instrument: str,
        timeframes: Sequence[Timeframe],
        count: int,
        indicators: Optional[dict[str, Any]] = None,
    ) -> EnsureResult:
        body: dict[str, Any] = {
            "instrument": instrument,
            "tf": [Timeframe(tf).value for tf in timeframes],
            "count": count,
        }
        # Empty config: let the upstream apply its own defaults
        if indicators:
            body["indicators"] = indicators

        payload = await self._call(
            PipelineStage.ENSURE, "POST", f"{self.base_url}/v1/ensure", json=body
        )

        try:
            return EnsureResult.model_validate(payload)
        except ValidationError as e:
            raise self._error(PipelineStage.ENSURE, f"Malformed ensure response: {e}")

    async def series(self, cache_key: str) -> dict[str, Any]:
        return await self._call(
            PipelineStage.SERIES,
            "GET",
            f"{self.base_url}/v1/series",
            params={"key": cache_key},
        )

    async def _call(self, step: PipelineStage, method: str, url: str, **kwargs) -> dict:
        try:
            return await asyncio.wait_for(
                self._request(step, method, url, **kwargs),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Upstream {step.value} timed out after {self.timeout_seconds:g}s")
            raise self._error(
                PipelineStage.TIMEOUT,
                f"{step.value} timed out after {self.timeout_seconds:g}s",
            )
        except aiohttp.ClientError as e:
            logger.warning(f"Upstream {step.value} transport error: {e}")
            raise self._error(step, f"{step.value} request failed: {e}", status_code=500)

    async def _request(self, step: PipelineStage, method: str, url: str, **kwargs) -> dict:
        async with aiohttp.ClientSession() as session:
            async with session.request(method, url, **kwargs) as response:
                text = await response.text(errors="replace")

                if not 200 <= response.status < 300:
                    logger.warning(f"Upstream {step.value} returned status {response.status}")
                    raise self._error(step, text, status_code=502)

        try:
            payload = json.loads(text)
        except ValueError:
            raise self._error(step, f"Upstream {step.value} returned invalid JSON")

        if not isinstance(payload, dict):
            raise self._error(step, f"Upstream {step.value} returned a non-object payload")
        return payload

    async def _status(self, url: str) -> int:
        async with aiohttp.ClientSession() as session:
            async with session.get(url) as response:
                return response.status

    async def upstream_health(self) -> dict[str, Any]:
        """
        Check the upstream is reachable.

        Tries /health first and falls back to /docs for services that do not
        expose a health route.
        """
        last_error: Optional[BaseException] = None
        for path in ("/health", "/docs"):
            try:
                status = await asyncio.wait_for(
                    self._status(f"{self.base_url}{path}"),
                    timeout=self.timeout_seconds,
                )
                return {"ok": True, "base": self.base_url, "upstream_status": status}
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.debug(f"Upstream health check {path} failed: {e!r}")
                last_error = e

        return {
            "ok": False,
            "base": self.base_url,
            "error": str(last_error) or type(last_error).__name__,
        }
