"""Conversion of finished packing state into an OptimizationResult."""

from __future__ import annotations

import logging
from typing import Sequence

from sheetcut.domain.value_objects import FreeRect, SheetSettings

from .models import OptimizationResult, PlacedPiece, SheetLayout, UnplacedPiece

logger = logging.getLogger(__name__)


def aggregate_result(
    sheets: Sequence[tuple[Sequence[PlacedPiece], Sequence[FreeRect]]],
    unplaced: Sequence[UnplacedPiece],
    settings: SheetSettings,
    truncated: bool = False,
) -> OptimizationResult:
    """Build sheet layouts and overall statistics.

    Args:
        sheets: Per sheet, in opening order, its placements and remaining
            free rectangles.
        unplaced: Unplaced instances, carried through unchanged.
        settings: Sheet settings used for the run.
        truncated: Whether a budget stopped the run early.

    Returns:
        The finished OptimizationResult.
    """
    layouts: list[SheetLayout] = []
    for index, (placements, free_rects) in enumerate(sheets):
        layout = SheetLayout(
            sheet_index=index,
            settings=settings,
            placements=tuple(placements),
            free_rects=tuple(free_rects),
        )
        layouts.append(layout)

        logger.debug(
            "Sheet %d: %d pieces, %.1f%% utilization",
            index,
            layout.piece_count,
            layout.utilization_percentage,
        )

    return OptimizationResult(
        layouts=tuple(layouts),
        unplaced=tuple(unplaced),
        settings=settings,
        overall_utilization_percentage=calculate_overall_utilization(layouts),
        truncated=truncated,
    )


def calculate_overall_utilization(layouts: Sequence[SheetLayout]) -> float:
    """Total used area over total sheet area across layouts, as a percentage.

    Args:
        layouts: Sheet layouts of a run.

    Returns:
        Utilization percentage (0-100), 0 when there are no sheets.
    """
    if not layouts:
        return 0.0

    total_area = sum(layout.total_area for layout in layouts)
    total_used = sum(layout.used_area for layout in layouts)

    if total_area == 0:
        return 0.0

    return total_used / total_area * 100
