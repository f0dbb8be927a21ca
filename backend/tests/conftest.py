from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from bff.core.config import Settings
from bff.schemas.analyze import EnsureResult
from bff.services.base import PipelineError
from bff.services.upstream import IndicatorsGateway, UpstreamGatewayInterface


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "indicators_base_url": "http://upstream.test",
        "bff_token": None,
        "bff_allow_anonymous": True,
        "upstream_timeout_seconds": 8.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


class FakeGateway(UpstreamGatewayInterface):
    """In-memory gateway that records calls."""

    def __init__(
        self,
        cache_keys: dict[str, str] | None = None,
        latest: dict[str, Any] | None = None,
        series_payload: dict[str, Any] | None = None,
        ensure_error: PipelineError | None = None,
        series_error: PipelineError | None = None,
    ) -> None:
        self.cache_keys = cache_keys if cache_keys is not None else {"M15": "k1", "H1": "k2", "H4": "k3"}
        self.latest = latest if latest is not None else {}
        self.series_payload = series_payload if series_payload is not None else {"ohlcv": {"time": []}}
        self.ensure_error = ensure_error
        self.series_error = series_error
        self.ensure_calls: list[dict[str, Any]] = []
        self.series_calls: list[str] = []

    async def ensure(self, instrument, timeframes, count, indicators=None) -> EnsureResult:
        self.ensure_calls.append(
            {
                "instrument": instrument,
                "tf": [tf.value for tf in timeframes],
                "count": count,
                "indicators": indicators,
            }
        )
        if self.ensure_error is not None:
            raise self.ensure_error
        return EnsureResult(latest=self.latest, cache_keys=self.cache_keys)

    async def series(self, cache_key: str) -> dict[str, Any]:
        self.series_calls.append(cache_key)
        if self.series_error is not None:
            raise self.series_error
        return self.series_payload

    async def upstream_health(self) -> dict[str, Any]:
        return {"ok": True, "base": "http://upstream.test", "upstream_status": 200}


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


def run_against_upstream(
    setup: Callable[[web.Application], None],
    scenario: Callable[[IndicatorsGateway], Awaitable[Any]],
    timeout_seconds: float = 2.0,
) -> Any:
    """Start a stub indicators service, run ``scenario`` against it, stop it."""

    async def main() -> Any:
        upstream = web.Application()
        setup(upstream)
        server = TestServer(upstream)
        await server.start_server()
        try:
            gateway = IndicatorsGateway(str(server.make_url("/")), timeout_seconds=timeout_seconds)
            return await scenario(gateway)
        finally:
            await server.close()

    return asyncio.run(main())


def make_series(bars: int, **indicators: Any) -> dict[str, Any]:
    """Series payload with ``bars`` flat bars and the given indicator arrays."""
    return {
        "ohlcv": {
            "time": list(range(bars)),
            "open": [1.0] * bars,
            "high": [1.0] * bars,
            "low": [1.0] * bars,
            "close": [1.0] * bars,
            "volume": [0] * bars,
        },
        "indicators": indicators,
    }
