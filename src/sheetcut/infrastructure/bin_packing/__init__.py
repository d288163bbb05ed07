"""Guillotine bin packing for sheet material optimization.

Pipeline, leaves first:

- expander: quantity expansion and feasibility filtering
- free_regions: per-sheet free rectangle list and guillotine split
- scorer: best-short-side-fit region/orientation selection
- packer: the sheet allocation loop (GuillotineBinPacker)
- aggregator: per-sheet and overall utilization
- service: one packing pass per material group (BinPackingService)
"""

from .aggregator import aggregate_result, calculate_overall_utilization
from .expander import ExpansionResult, expand_pieces, fits_empty_sheet
from .free_regions import FreeRegionTracker, split_region
from .models import (
    BinPackingConfig,
    CutPlan,
    Offcut,
    OptimizationResult,
    PackingBudget,
    PlacedPiece,
    SheetLayout,
    UnplacedPiece,
    UnplacedReason,
)
from .packer import GuillotineBinPacker
from .scorer import FitCandidate, find_best_fit
from .service import BinPackingService

__all__ = [
    "BinPackingConfig",
    "BinPackingService",
    "CutPlan",
    "ExpansionResult",
    "FitCandidate",
    "FreeRegionTracker",
    "GuillotineBinPacker",
    "Offcut",
    "OptimizationResult",
    "PackingBudget",
    "PlacedPiece",
    "SheetLayout",
    "UnplacedPiece",
    "UnplacedReason",
    "aggregate_result",
    "calculate_overall_utilization",
    "expand_pieces",
    "find_best_fit",
    "fits_empty_sheet",
    "split_region",
]
