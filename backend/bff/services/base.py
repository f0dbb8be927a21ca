"""
Base Service Interface

All services inherit from this base class.
Every failure in the analysis pipeline is a PipelineError tagged with the
stage that raised it.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, Optional, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """
    Base class for all services.

    Each service:
    - Has a defined input type
    - Has a defined output type
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Execute the service's main function.

        Raises:
            PipelineError: If execution fails
        """
        pass


class PipelineStage(str, Enum):
    """Stage tag surfaced to the caller as ``step``."""

    ENV = "env"
    AUTH = "auth"
    PARSE = "parse"
    VALIDATE = "validate"
    ENSURE = "ensure"
    CACHE_KEY = "cache_key"
    SERIES = "series"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


DEFAULT_STATUS = {
    PipelineStage.ENV: 500,
    PipelineStage.AUTH: 401,
    PipelineStage.PARSE: 400,
    PipelineStage.VALIDATE: 400,
    PipelineStage.ENSURE: 502,
    PipelineStage.CACHE_KEY: 500,
    PipelineStage.SERIES: 502,
    PipelineStage.TIMEOUT: 500,
    PipelineStage.UNKNOWN: 500,
}


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class PipelineError(ServiceError):
    """A failure at one stage of the analysis pipeline."""

    def __init__(
        self,
        step: PipelineStage,
        message: str,
        status_code: Optional[int] = None,
        service_name: str = "AnalyzeService",
        details: dict = None,
    ):
        self.step = PipelineStage(step)
        self.status_code = status_code or DEFAULT_STATUS[self.step]
        super().__init__(service_name, message, details)

    def to_envelope(self) -> dict:
        return {"ok": False, "step": self.step.value, "error": self.message}


class ExternalAPIError(PipelineError):
    """Upstream indicators service call failed."""
    pass
