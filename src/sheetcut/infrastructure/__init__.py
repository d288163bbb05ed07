"""Infrastructure layer - packing engine, formatters and exporters."""

from .bin_packing import (
    BinPackingConfig,
    BinPackingService,
    CutPlan,
    GuillotineBinPacker,
    Offcut,
    OptimizationResult,
    PackingBudget,
    PlacedPiece,
    SheetLayout,
    UnplacedPiece,
)
from .exporters import ExporterRegistry, ExportManager, plan_to_dict
from .formatters import CutPlanFormatter

__all__ = [
    "BinPackingConfig",
    "BinPackingService",
    "CutPlan",
    "CutPlanFormatter",
    "ExportManager",
    "ExporterRegistry",
    "GuillotineBinPacker",
    "Offcut",
    "OptimizationResult",
    "PackingBudget",
    "PlacedPiece",
    "SheetLayout",
    "UnplacedPiece",
    "plan_to_dict",
]
