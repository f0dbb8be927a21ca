"""
Cache-Key Selector

Picks the one timeframe whose cached series is fetched and summarized.
"""

from typing import Mapping, Sequence

from bff.schemas.analyze import Timeframe, PREFERRED_TIMEFRAME
from bff.services.base import PipelineError, PipelineStage


def pick_timeframe(requested: Sequence[Timeframe]) -> Timeframe:
    """H1 wins wherever it appears; otherwise the first requested timeframe."""
    if not requested:
        raise PipelineError(PipelineStage.VALIDATE, "No timeframe requested")
    if PREFERRED_TIMEFRAME in requested:
        return PREFERRED_TIMEFRAME
    return requested[0]


def select(
    cache_keys: Mapping[str, object],
    requested: Sequence[Timeframe],
) -> tuple[Timeframe, str]:
    """
    Return the chosen timeframe and its cache key.

    A missing key means the upstream broke its contract, so this is a
    server-side failure rather than a client error.
    """
    timeframe = pick_timeframe(requested)
    key = cache_keys.get(timeframe.value)
    if not isinstance(key, str) or not key:
        raise PipelineError(
            PipelineStage.CACHE_KEY,
            f"Upstream returned no cache key for {timeframe.value}",
        )
    return timeframe, key
