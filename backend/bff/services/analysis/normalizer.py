"""
Parameter Normalizer

Turns a raw request body into a validated AnalyzeRequest.
Malformed JSON fails with stage ``parse``; anything rejected on content
fails with stage ``validate``.
"""

import json
import logging
import re
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from bff.schemas.analyze import AnalyzeBody, AnalyzeRequest, Timeframe, LEGACY_TIMEFRAMES
from bff.services.base import PipelineError, PipelineStage

logger = logging.getLogger(__name__)

INSTRUMENT_PATTERN = re.compile(r"^[A-Z]{3}_[A-Z]{3}$")
DEFAULT_COUNT = 240


def parse_body(raw: bytes) -> dict:
    """Decode the request body into a JSON object."""
    try:
        payload = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise PipelineError(PipelineStage.PARSE, f"Invalid JSON body: {e}")

    if not isinstance(payload, dict):
        raise PipelineError(PipelineStage.PARSE, "Request body must be a JSON object")
    return payload


def normalize_timeframes(codes: Iterable[Any]) -> list[Timeframe]:
    """
    Canonicalize timeframe codes.

    Codes must match exactly, like the instrument (no case folding). Legacy
    codes are mapped first (D1 -> H4), unknown codes are dropped and
    duplicates removed, keeping the order of first occurrence.
    """
    result: list[Timeframe] = []
    for code in codes:
        if not isinstance(code, str):
            continue
        if code in LEGACY_TIMEFRAMES:
            timeframe = LEGACY_TIMEFRAMES[code]
        else:
            try:
                timeframe = Timeframe(code)
            except ValueError:
                logger.debug(f"Dropping unsupported timeframe {code!r}")
                continue
        if timeframe not in result:
            result.append(timeframe)
    return result


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "body"
    return f"{field}: {first.get('msg', 'invalid value')}"


def normalize_request(payload: dict, default_count: Optional[int] = None) -> AnalyzeRequest:
    """Validate a decoded body and produce the canonical request."""
    try:
        body = AnalyzeBody.model_validate(payload)
    except ValidationError as e:
        raise PipelineError(PipelineStage.VALIDATE, _describe(e))

    if not INSTRUMENT_PATTERN.match(body.instrument):
        raise PipelineError(
            PipelineStage.VALIDATE,
            f"instrument must look like USD_JPY, got {body.instrument!r}",
        )

    if not isinstance(body.tf, (list, tuple)):
        raise PipelineError(PipelineStage.VALIDATE, "tf must be a list of timeframe codes")

    timeframes = normalize_timeframes(body.tf)
    if not timeframes:
        allowed = ", ".join(t.value for t in Timeframe)
        raise PipelineError(
            PipelineStage.VALIDATE,
            f"tf contains no supported timeframe (allowed: {allowed})",
        )

    count = body.count if body.count is not None else (default_count or DEFAULT_COUNT)

    return AnalyzeRequest(
        instrument=body.instrument,
        timeframes=timeframes,
        count=count,
        indicator_config=body.indicators,
        preset_name=body.preset,
    )


def normalize(raw: bytes, default_count: Optional[int] = None) -> AnalyzeRequest:
    """Parse and normalize a raw request body."""
    return normalize_request(parse_body(raw), default_count=default_count)
