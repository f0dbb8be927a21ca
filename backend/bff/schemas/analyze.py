"""
CONTRACT: Analyze Pipeline

Input: AnalyzeBody (raw JSON from the client)
Output: AnalyzeSuccess | AnalyzeFailure

The upstream indicators service owns all indicator math. These models only
describe what crosses the BFF boundary in either direction.
"""

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================


class Timeframe(str, Enum):
    M15 = "M15"
    H1 = "H1"
    H4 = "H4"


# Legacy codes accepted from older clients, mapped before validation
LEGACY_TIMEFRAMES = {
    "D1": Timeframe.H4,
}

# Timeframe whose cache key is summarized whenever it was requested
PREFERRED_TIMEFRAME = Timeframe.H1


class PresetName(str, Enum):
    DEFAULT = "default"
    LIGHT = "light"
    TREND = "trend"
    MEAN_REVERT = "mean_revert"


# =============================================================================
# INPUT: AnalyzeBody / AnalyzeRequest
# =============================================================================


class AnalyzeBody(BaseModel):
    """
    Raw request body.
    Sent by: Frontend
    Received by: Parameter Normalizer

    Types are lenient on purpose for tf; the normalizer decides what survives.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    instrument: str = Field(..., description="Currency pair, e.g. USD_JPY")
    tf: Any = Field(
        default=None,
        validation_alias=AliasChoices("tf", "timeframes"),
        description="Requested timeframe codes, e.g. ['M15', 'H1', 'D1']",
    )
    count: Optional[int] = Field(
        default=None,
        gt=0,
        strict=True,
        description="Bars of history to compute (default 240)",
    )
    indicators: Optional[dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices("indicators", "indicatorConfig", "indicator_config"),
        description="Indicator overrides, shallow-merged over the preset",
    )
    preset: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("preset", "presetName", "preset_name"),
        description="Named preset: default / light / trend / mean_revert",
    )


class AnalyzeRequest(BaseModel):
    """Validated, canonical request handed to the pipeline."""

    instrument: str
    timeframes: list[Timeframe] = Field(..., min_length=1)
    count: int = Field(default=240, gt=0)
    indicator_config: Optional[dict[str, Any]] = None
    preset_name: Optional[str] = None


# =============================================================================
# UPSTREAM PAYLOADS
# =============================================================================


class EnsureResult(BaseModel):
    """Response of POST /v1/ensure."""

    model_config = ConfigDict(extra="ignore")

    latest: dict[str, Any] = Field(default_factory=dict)
    cache_keys: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# OUTPUT: Envelopes
# =============================================================================


class AnalyzeSuccess(BaseModel):
    ok: Literal[True] = True
    latest: dict[str, Any]
    key: str
    raw: dict[str, Any]
    notes: str


class AnalyzeFailure(BaseModel):
    ok: Literal[False] = False
    step: str
    error: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"ok": False, "step": "ensure", "error": "boom"},
        }
    )
