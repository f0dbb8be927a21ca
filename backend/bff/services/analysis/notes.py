"""
Note Synthesizer

Rule-based commentary from the latest indicator values.
Pure functions: the same snapshot always yields the same notes.
"""

import math
from typing import Any, Optional

RSI_OVERBOUGHT = 70.0
RSI_OVERSOLD = 30.0
ADX_STRONG_TREND = 25.0
MIN_SERIES_BARS = 30

SEPARATOR = " / "
NO_SIGNAL = "no notable signal"
INSUFFICIENT_DATA = "insufficient data, reference only"


def _num(value: Any) -> Optional[float]:
    """Read a number from a bare value or a ``{"value": n}`` object."""
    if isinstance(value, dict):
        value = value.get("value")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if math.isnan(value):
        return None
    return value


def _field(section: Any, *names: str) -> Optional[float]:
    if not isinstance(section, dict):
        return None
    for name in names:
        if name in section:
            return _num(section[name])
    return None


def _rsi_note(snapshot: dict) -> Optional[str]:
    rsi = _num(snapshot.get("rsi"))
    if rsi is None:
        return None
    if rsi >= RSI_OVERBOUGHT:
        return f"RSI={rsi:.1f} (overbought)"
    if rsi <= RSI_OVERSOLD:
        return f"RSI={rsi:.1f} (oversold)"
    return f"RSI={rsi:.1f}"


def _bollinger_note(snapshot: dict) -> Optional[str]:
    bb = snapshot.get("bb")
    if not isinstance(bb, dict):
        return None

    close = _num(snapshot.get("close"))
    lower = _field(bb, "lower")
    upper = _field(bb, "upper")
    mid = _field(bb, "mid", "middle")

    if close is not None:
        if lower is not None and close <= lower:
            return "near lower band"
        if upper is not None and close >= upper:
            return "near upper band"
    if mid is not None:
        return f"BB mid={mid:.3f}"
    return None


def _macd_note(snapshot: dict) -> Optional[str]:
    macd = snapshot.get("macd")
    line = _field(macd, "macd", "line")
    signal = _field(macd, "signal")
    if line is None or signal is None:
        return None
    if line < signal:
        return "MACD dead cross (bearish)"
    if line > signal:
        return "MACD golden cross (bullish)"
    return None


def _adx_note(snapshot: dict) -> Optional[str]:
    adx = _num(snapshot.get("adx"))
    if adx is not None and adx >= ADX_STRONG_TREND:
        return f"ADX={adx:.1f} (strong trend)"
    return None


RULES = (_rsi_note, _bollinger_note, _macd_note, _adx_note)


def synthesize(snapshot: Optional[dict]) -> str:
    """
    Build the notes string for one snapshot.

    Expected shape (every section optional)::

        {
            "close": 112.0,
            "rsi": {"value": 75.0},
            "bb": {"lower": 100.0, "mid": 105.0, "upper": 110.0},
            "macd": {"macd": 0.12, "signal": 0.10},
            "adx": {"value": 31.0},
        }
    """
    if not isinstance(snapshot, dict):
        return NO_SIGNAL

    bits = [note for note in (rule(snapshot) for rule in RULES) if note]
    return SEPARATOR.join(bits) if bits else NO_SIGNAL


def _last(values: Any, index: int) -> Any:
    if isinstance(values, (list, tuple)) and 0 <= index < len(values):
        return values[index]
    return None


def snapshot_from_series(series: dict) -> dict:
    """Collapse a full series payload to its last bar."""
    ohlcv = series.get("ohlcv") or {}
    indicators = series.get("indicators")
    if not isinstance(indicators, dict):
        indicators = {}
    last = series_length(series) - 1

    snapshot: dict[str, Any] = {"close": _last(ohlcv.get("close"), last)}

    for name in ("rsi", "adx"):
        if name in indicators:
            snapshot[name] = _last(indicators[name], last)

    for name in ("bb", "macd"):
        section = indicators.get(name)
        if isinstance(section, dict):
            snapshot[name] = {
                field: _last(values, last) for field, values in section.items()
            }

    return snapshot


def series_length(series: dict) -> int:
    ohlcv = series.get("ohlcv") or {}
    if not isinstance(ohlcv, dict):
        return 0
    bars = ohlcv.get("time")
    if bars is None:
        bars = ohlcv.get("close")
    return len(bars) if isinstance(bars, (list, tuple)) else 0


def synthesize_series(series: Optional[dict]) -> str:
    """Notes for a full series; short histories only get a placeholder."""
    if not isinstance(series, dict) or series_length(series) < MIN_SERIES_BARS:
        return INSUFFICIENT_DATA
    return synthesize(snapshot_from_series(series))


def build_notes(series: Optional[dict], latest: Optional[dict] = None) -> str:
    """Prefer the series when it carries bars, else the ensure snapshot."""
    if isinstance(series, dict) and "ohlcv" in series:
        return synthesize_series(series)
    return synthesize(latest)
