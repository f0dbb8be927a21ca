"""Tests for request parsing and parameter normalization."""

from __future__ import annotations

import json

import pytest

from bff.schemas.analyze import Timeframe
from bff.services.analysis.normalizer import normalize, normalize_timeframes
from bff.services.base import PipelineError, PipelineStage


def _body(**fields) -> bytes:
    return json.dumps(fields).encode()


def test_normalize_timeframes_maps_legacy_and_dedupes() -> None:
    assert normalize_timeframes(["M15", "H1", "D1"]) == [Timeframe.M15, Timeframe.H1, Timeframe.H4]
    assert normalize_timeframes(["H1", "H1", "M15", "H1"]) == [Timeframe.H1, Timeframe.M15]
    assert normalize_timeframes(["D1", "H4"]) == [Timeframe.H4]
    assert normalize_timeframes(["H4", "D1", "M15"]) == [Timeframe.H4, Timeframe.M15]


def test_normalize_timeframes_drops_unknown_codes() -> None:
    assert normalize_timeframes(["W1", "H1", 5, None, "M15"]) == [Timeframe.H1, Timeframe.M15]
    assert normalize_timeframes(["W1", "M5"]) == []


def test_normalize_timeframes_is_case_sensitive() -> None:
    assert normalize_timeframes(["h1", " M15 ", "d1", "H1 "]) == []


def test_normalize_defaults_count() -> None:
    request = normalize(_body(instrument="USD_JPY", tf=["H1"]))

    assert request.instrument == "USD_JPY"
    assert request.timeframes == [Timeframe.H1]
    assert request.count == 240
    assert request.indicator_config is None
    assert request.preset_name is None


def test_normalize_accepts_long_field_names() -> None:
    request = normalize(
        _body(
            instrument="EUR_USD",
            timeframes=["D1"],
            count=500,
            indicatorConfig={"rsi": {"period": 9}},
            presetName="trend",
        )
    )

    assert request.timeframes == [Timeframe.H4]
    assert request.count == 500
    assert request.indicator_config == {"rsi": {"period": 9}}
    assert request.preset_name == "trend"


def test_normalize_uses_configured_default_count() -> None:
    request = normalize(_body(instrument="USD_JPY", tf=["H1"], count=None), default_count=120)
    assert request.count == 120


@pytest.mark.parametrize("raw", [b"", b"{not json", b"[1, 2]", b'"USD_JPY"'])
def test_malformed_body_fails_parse(raw: bytes) -> None:
    with pytest.raises(PipelineError) as excinfo:
        normalize(raw)
    assert excinfo.value.step == PipelineStage.PARSE
    assert excinfo.value.status_code == 400


@pytest.mark.parametrize(
    "fields",
    [
        {"tf": ["H1"]},
        {"instrument": "USDJPY", "tf": ["H1"]},
        {"instrument": "usd_jpy", "tf": ["H1"]},
        {"instrument": "USD_JPYX", "tf": ["H1"]},
        {"instrument": 42, "tf": ["H1"]},
    ],
)
def test_bad_instrument_fails_validate(fields: dict) -> None:
    with pytest.raises(PipelineError) as excinfo:
        normalize(_body(**fields))
    assert excinfo.value.step == PipelineStage.VALIDATE
    assert excinfo.value.status_code == 400


@pytest.mark.parametrize("tf", [None, [], ["W1"], "H1", ["h1"], [" m15 "]])
def test_empty_timeframes_fail_validate(tf) -> None:
    with pytest.raises(PipelineError) as excinfo:
        normalize(_body(instrument="USD_JPY", tf=tf))
    assert excinfo.value.step == PipelineStage.VALIDATE


@pytest.mark.parametrize("count", [0, -5, "240", 2.5, True])
def test_bad_count_fails_validate(count) -> None:
    with pytest.raises(PipelineError) as excinfo:
        normalize(_body(instrument="USD_JPY", tf=["H1"], count=count))
    assert excinfo.value.step == PipelineStage.VALIDATE


def test_large_count_is_passed_through() -> None:
    assert normalize(_body(instrument="USD_JPY", tf=["H1"], count=100000)).count == 100000
