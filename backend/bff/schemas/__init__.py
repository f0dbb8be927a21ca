"""
BFF Schema Contracts

JSON contracts between the client, the BFF pipeline and the upstream
indicators service.
"""

from bff.schemas.analyze import (
    AnalyzeBody,
    AnalyzeRequest,
    AnalyzeSuccess,
    AnalyzeFailure,
    EnsureResult,
    Timeframe,
    PresetName,
    LEGACY_TIMEFRAMES,
    PREFERRED_TIMEFRAME,
)

__all__ = [
    # Inbound
    "AnalyzeBody",
    "AnalyzeRequest",
    # Upstream
    "EnsureResult",
    # Outbound
    "AnalyzeSuccess",
    "AnalyzeFailure",
    # Enums
    "Timeframe",
    "PresetName",
    "LEGACY_TIMEFRAMES",
    "PREFERRED_TIMEFRAME",
]
