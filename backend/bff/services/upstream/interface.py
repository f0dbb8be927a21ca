"""
Upstream Gateway Interface

Defines the contract for talking to the indicators service.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from bff.schemas.analyze import EnsureResult, Timeframe


class UpstreamGatewayInterface(ABC):
    """
    Upstream Gateway Contract.

    ensure: POST {BASE}/v1/ensure -> EnsureResult
    series: GET  {BASE}/v1/series?key=... -> full OHLCV + indicator series

    Every failure is raised as a PipelineError tagged ensure / series / timeout.
    """

    @property
    def name(self) -> str:
        return "IndicatorsGateway"

    @abstractmethod
    async def ensure(
        self,
        instrument: str,
        timeframes: Sequence[Timeframe],
        count: int,
        indicators: Optional[dict[str, Any]] = None,
    ) -> EnsureResult:
        """Trigger computation and get one cache key per timeframe."""
        pass

    @abstractmethod
    async def series(self, cache_key: str) -> dict[str, Any]:
        """Fetch the cached series for one key."""
        pass

    @abstractmethod
    async def upstream_health(self) -> dict[str, Any]:
        """Check that the upstream service answers."""
        pass
