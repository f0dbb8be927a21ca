"""
Analysis Service Interface

Defines the contract for the analyze pipeline.
"""

from abc import abstractmethod
from typing import Optional

from bff.services.base import BaseService
from bff.schemas.analyze import AnalyzeRequest, AnalyzeSuccess


class AnalyzeServiceInterface(BaseService[AnalyzeRequest, AnalyzeSuccess]):
    """
    Analyze Pipeline Contract.

    INPUT: AnalyzeRequest
        - instrument: currency pair (USD_JPY)
        - timeframes: canonical, deduplicated timeframe codes
        - count: bars of history
        - indicator_config / preset_name: raw overrides and preset

    OUTPUT: AnalyzeSuccess
        - latest: per-timeframe latest snapshot from ensure
        - key: cache key of the summarized timeframe
        - raw: series payload, verbatim
        - notes: rule-based commentary

    PIPELINE:
        Normalizer -> Preset Resolver -> ensure -> Cache-Key Selector
            -> series -> Note Synthesizer -> envelope
    """

    @property
    def name(self) -> str:
        return "AnalyzeService"

    @abstractmethod
    async def execute(self, input_data: AnalyzeRequest) -> AnalyzeSuccess:
        """Run ensure + series for a validated request."""
        pass

    @abstractmethod
    async def run(self, body: bytes, token: Optional[str] = None) -> tuple[int, dict]:
        """
        Run the full pipeline from a raw body.

        Never raises: returns the HTTP status and the JSON envelope.
        """
        pass
