"""
Preset Resolver

Named indicator-configuration bundles, shallow-merged with caller overrides.
"""

import copy
import logging
from typing import Any, Optional

from bff.schemas.analyze import PresetName

logger = logging.getLogger(__name__)


PRESETS: dict[str, dict[str, Any]] = {
    PresetName.DEFAULT.value: {
        "rsi": {"period": 14},
        "sma": {"periods": [20, 50]},
        "ema": {"periods": [12, 26]},
        "macd": {"fast": 12, "slow": 26, "signal": 9},
        "bb": {"period": 20, "stddev": 2.0},
    },
    PresetName.LIGHT.value: {
        "rsi": {"period": 14},
        "bb": {"period": 20, "stddev": 2.0},
    },
    PresetName.TREND.value: {
        "sma": {"periods": [50, 200]},
        "ema": {"periods": [20, 50]},
        "macd": {"fast": 12, "slow": 26, "signal": 9},
        "adx": {"period": 14},
    },
    PresetName.MEAN_REVERT.value: {
        "rsi": {"period": 7},
        "sma": {"periods": [20]},
        "bb": {"period": 20, "stddev": 2.5},
    },
}


def get_preset(name: Optional[str]) -> dict[str, Any]:
    """
    Base configuration for a preset.

    Unknown names resolve to an empty base instead of failing.
    """
    if name is None:
        return {}
    base = PRESETS.get(name)
    if base is None:
        logger.warning(f"Unknown preset {name!r}, using empty base configuration")
        return {}
    return copy.deepcopy(base)


def resolve(
    preset_name: Optional[str] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """
    Merge caller overrides onto a preset.

    The merge is shallow: an indicator key present in overrides replaces the
    preset entry as a whole, nested parameters are never combined.
    """
    config = get_preset(preset_name)
    if overrides:
        config.update(overrides)
    return config
