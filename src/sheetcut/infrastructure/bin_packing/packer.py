"""Guillotine best-short-side-fit sheet allocator."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Sequence

from sheetcut.domain.exceptions import PackingInvariantError
from sheetcut.domain.value_objects import Piece, PieceInstance

from .aggregator import aggregate_result
from .expander import expand_pieces
from .free_regions import FreeRegionTracker
from .models import (
    BinPackingConfig,
    OptimizationResult,
    PackingBudget,
    PlacedPiece,
    UnplacedPiece,
    UnplacedReason,
)
from .scorer import find_best_fit

logger = logging.getLogger(__name__)


@dataclass
class _SheetState:
    """Internal state for an open sheet during packing.

    Attributes:
        index: Sheet index (0-based, opening order).
        tracker: Free regions remaining on the sheet.
        placements: Pieces placed so far, in placement order.
    """

    index: int
    tracker: FreeRegionTracker
    placements: list[PlacedPiece] = field(default_factory=list)


class _BudgetClock:
    """Tracks a PackingBudget across one run."""

    def __init__(self, budget: PackingBudget) -> None:
        self.budget = budget
        self.processed = 0
        self._deadline = (
            time.monotonic() + budget.time_limit
            if budget.time_limit is not None
            else None
        )

    def exhausted(self) -> bool:
        if (
            self.budget.max_placements is not None
            and self.processed >= self.budget.max_placements
        ):
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline


class GuillotineBinPacker:
    """Greedy guillotine packer with best-short-side-fit placement.

    Pieces are expanded by quantity, oversized ones are routed to the
    unplaced list, and the rest are placed largest area first. Each
    instance goes to the first open sheet (in opening order) with any
    free region that holds it, using the tightest region there. A new
    sheet is opened only when no open sheet has room.

    The result is deterministic for a given input order and settings.
    It is a heuristic and does not search for the minimum sheet count.

    Attributes:
        config: Bin packing configuration (sheet settings, budget).
    """

    def __init__(self, config: BinPackingConfig | None = None) -> None:
        """Initialize the packer with configuration.

        Args:
            config: Bin packing configuration. Defaults to a standard
                2440x1220 sheet with a 3.175 kerf.
        """
        self.config = config or BinPackingConfig()

    def pack(self, pieces: Sequence[Piece]) -> OptimizationResult:
        """Pack pieces onto as few sheets as the heuristic manages.

        Args:
            pieces: Pieces to pack (may have quantity > 1).

        Returns:
            OptimizationResult with layouts, unplaced pieces and
            utilization figures.

        Raises:
            PackingInvariantError: If internal bookkeeping is inconsistent.
        """
        settings = self.config.sheet
        expansion = expand_pieces(pieces, settings)
        ordered = self._sort_by_area(expansion.instances)

        logger.debug(
            "Packing %d instances (%d unplaceable) onto %sx%s sheets",
            len(ordered),
            len(expansion.unplaced),
            settings.width,
            settings.height,
        )

        sheets: list[_SheetState] = []
        clock = _BudgetClock(self.config.budget)
        skipped: list[UnplacedPiece] = []

        for position, instance in enumerate(ordered):
            if clock.exhausted():
                skipped = [
                    UnplacedPiece.from_instance(i, UnplacedReason.BUDGET_EXHAUSTED)
                    for i in ordered[position:]
                ]
                logger.warning(
                    "Packing budget exhausted after %d placements, %d instances left",
                    clock.processed,
                    len(skipped),
                )
                break

            self._place(instance, sheets)
            clock.processed += 1

        return aggregate_result(
            [(sheet.placements, sheet.tracker.regions) for sheet in sheets],
            expansion.unplaced + tuple(skipped),
            settings,
            truncated=bool(skipped),
        )

    def _sort_by_area(
        self, instances: Sequence[PieceInstance]
    ) -> list[PieceInstance]:
        """Sort instances by area descending, input order breaking ties."""
        return sorted(instances, key=lambda i: (-i.area, i.input_order))

    def _place(self, instance: PieceInstance, sheets: list[_SheetState]) -> PlacedPiece:
        """Place an instance on the first open sheet with room, else a new one."""
        for sheet in sheets:
            placement = self._try_place(instance, sheet)
            if placement is not None:
                return placement

        sheet = _SheetState(
            index=len(sheets),
            tracker=FreeRegionTracker(self.config.sheet),
        )
        sheets.append(sheet)
        logger.debug("Opened sheet %d for '%s'", sheet.index, instance.label)

        placement = self._try_place(instance, sheet)
        if placement is None:
            raise PackingInvariantError(
                f"Piece '{instance.label}' passed the feasibility check but does "
                f"not fit an empty sheet"
            )
        return placement

    def _try_place(
        self, instance: PieceInstance, sheet: _SheetState
    ) -> PlacedPiece | None:
        """Commit the best-fit placement on one sheet, if any."""
        candidate = find_best_fit(instance, sheet.tracker.regions)
        if candidate is None:
            return None

        region = sheet.tracker.consume_and_split(
            candidate.region_index, candidate.width, candidate.height
        )
        placement = PlacedPiece(
            instance=instance,
            x=region.x,
            y=region.y,
            width=candidate.width,
            height=candidate.height,
            sheet_index=sheet.index,
            rotated=candidate.rotated,
        )
        sheet.placements.append(placement)

        if candidate.rotated:
            logger.debug(
                "Piece '%s' placed rotated at (%s, %s) on sheet %d, "
                "placed dimensions: %sx%s (original: %sx%s)",
                instance.label,
                placement.x,
                placement.y,
                sheet.index,
                placement.width,
                placement.height,
                instance.width,
                instance.height,
            )

        return placement
