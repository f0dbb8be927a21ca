from __future__ import annotations

from bff.services.analysis.presets import PRESETS, resolve


def test_resolve_without_preset_or_overrides_is_empty() -> None:
    assert resolve() == {}
    assert resolve(None, {}) == {}


def test_resolve_known_preset_returns_copy() -> None:
    config = resolve("default")

    assert config == PRESETS["default"]
    config["rsi"]["period"] = 99
    assert PRESETS["default"]["rsi"]["period"] == 14


def test_every_preset_is_resolvable() -> None:
    for name in ("default", "light", "trend", "mean_revert"):
        assert resolve(name), name


def test_unknown_preset_falls_back_to_overrides_only() -> None:
    assert resolve("does_not_exist") == {}
    assert resolve("does_not_exist", {"rsi": {"period": 9}}) == {"rsi": {"period": 9}}


def test_override_replaces_nested_object_wholesale() -> None:
    config = resolve("default", {"macd": {"fast": 5}})

    assert config["macd"] == {"fast": 5}
    assert config["rsi"] == {"period": 14}


def test_override_adds_new_indicator() -> None:
    config = resolve("light", {"adx": {"period": 10}})
    assert set(config) == {"rsi", "bb", "adx"}


def test_merging_same_overrides_twice_is_idempotent() -> None:
    overrides = {"bb": {"period": 10, "stddev": 3.0}, "ema": {"periods": [5]}}

    once = resolve("trend", overrides)
    twice = resolve("trend", overrides)
    twice.update(overrides)

    assert once == twice


def test_resolve_does_not_mutate_overrides() -> None:
    overrides = {"rsi": {"period": 3}}
    resolve("default", overrides)
    assert overrides == {"rsi": {"period": 3}}
