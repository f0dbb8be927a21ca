"""
Analysis Service Implementation

Orchestrates the analyze pipeline and assembles the response envelope.
"""

import hmac
import logging
from typing import Optional

from bff.core.config import Settings
from bff.schemas.analyze import AnalyzeRequest, AnalyzeSuccess
from bff.services.analysis import notes, presets, selector
from bff.services.analysis.interface import AnalyzeServiceInterface
from bff.services.analysis.normalizer import normalize
from bff.services.base import PipelineError, PipelineStage
from bff.services.upstream.interface import UpstreamGatewayInterface

logger = logging.getLogger(__name__)


class AnalyzeService(AnalyzeServiceInterface):
    """
    Analyze pipeline.

    Configuration and the gateway are passed in explicitly; the service
    holds no state across requests.
    """

    def __init__(self, settings: Settings, gateway: Optional[UpstreamGatewayInterface]):
        self.settings = settings
        self.gateway = gateway

    def check_environment(self) -> None:
        if not self.settings.indicators_base_url or self.gateway is None:
            raise PipelineError(PipelineStage.ENV, "INDICATORS_BASE_URL is not set")

    def authorize(self, token: Optional[str]) -> None:
        """Shared-secret check on the x-bff-token header."""
        expected = self.settings.bff_token
        if expected is None:
            if self.settings.bff_allow_anonymous:
                return
            raise PipelineError(
                PipelineStage.ENV,
                "BFF_TOKEN is not set (set BFF_ALLOW_ANONYMOUS=true to run without auth)",
            )
        if token is None or not hmac.compare_digest(token.encode(), expected.encode()):
            raise PipelineError(PipelineStage.AUTH, "Invalid or missing x-bff-token")

    async def execute(self, input_data: AnalyzeRequest) -> AnalyzeSuccess:
        request = input_data
        logger.info(
            f"Analyze {request.instrument} tf={[t.value for t in request.timeframes]} "
            f"count={request.count} preset={request.preset_name}"
        )

        indicators = presets.resolve(request.preset_name, request.indicator_config)

        ensured = await self.gateway.ensure(
            request.instrument,
            request.timeframes,
            request.count,
            indicators,
        )

        timeframe, key = selector.select(ensured.cache_keys, request.timeframes)
        logger.info(f"Selected {timeframe.value} cache key {key}")

        series = await self.gateway.series(key)

        return AnalyzeSuccess(
            latest=ensured.latest,
            key=key,
            raw=series,
            notes=notes.build_notes(series, ensured.latest.get(timeframe.value)),
        )

    async def run(self, body: bytes, token: Optional[str] = None) -> tuple[int, dict]:
        try:
            self.check_environment()
            self.authorize(token)
            request = normalize(body, default_count=self.settings.default_count)
            result = await self.execute(request)
            return 200, result.model_dump()
        except PipelineError as e:
            log = logger.info if e.status_code < 500 else logger.warning
            log(f"Analyze failed at {e.step.value}: {e.message}")
            return e.status_code, e.to_envelope()
        except Exception as e:
            logger.exception("Unhandled error in analyze pipeline")
            return 500, {"ok": False, "step": PipelineStage.UNKNOWN.value, "error": str(e)}
