"""
BFF Services

Service layer containing all orchestration logic.
Each service has a defined interface (contract) and implementation.
"""

from bff.services.base import BaseService, PipelineError, PipelineStage

__all__ = ["BaseService", "PipelineError", "PipelineStage"]
