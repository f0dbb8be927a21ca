"""
Analysis Service

CONTRACT:
    Input:  raw request body (+ x-bff-token header)
    Output: { ok: true, latest, key, raw, notes }
            or { ok: false, step, error }

RESPONSIBILITIES:
    - Normalize parameters (instrument, timeframes, count)
    - Resolve presets and merge overrides (shallow)
    - Drive ensure -> series against the upstream gateway
    - Pick the summarized timeframe (H1 preferred)
    - Synthesize short rule-based notes

Every failure is reported with the stage that raised it.
"""

from bff.services.analysis.interface import AnalyzeServiceInterface
from bff.services.analysis.service import AnalyzeService

__all__ = [
    "AnalyzeServiceInterface",
    "AnalyzeService",
]
