"""Application layer - use cases and orchestration."""

from .commands import OptimizeCutPlanCommand
from .dtos import CutPlanOutput

__all__ = [
    "CutPlanOutput",
    "OptimizeCutPlanCommand",
]
