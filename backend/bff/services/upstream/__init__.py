"""
Upstream Gateway

CONTRACT:
    ensure: instrument + timeframes + count + indicator config -> EnsureResult
    series: cache key -> full series payload

RESPONSIBILITIES:
    - Issue the two upstream calls, strictly in sequence
    - Enforce a per-call deadline with cancellation
    - Translate failures into stage-tagged PipelineErrors

NO indicator math here. The upstream service owns all computation.
"""

from bff.services.upstream.interface import UpstreamGatewayInterface
from bff.services.upstream.gateway import IndicatorsGateway, DEFAULT_TIMEOUT_SECONDS

__all__ = [
    "UpstreamGatewayInterface",
    "IndicatorsGateway",
    "DEFAULT_TIMEOUT_SECONDS",
]
