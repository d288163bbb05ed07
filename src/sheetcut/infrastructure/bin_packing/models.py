"""Bin packing configuration and result models.

This module provides data structures for representing packing
configuration, piece placements, sheet layouts and packing results for
the guillotine bin packing algorithm.

All dataclasses are frozen (immutable) so results can be shared between
callers without copying.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from sheetcut.domain.value_objects import FreeRect, PieceInstance, SheetSettings


@dataclass(frozen=True)
class PackingBudget:
    """Optional limits on a single packing run.

    When a limit is reached, every instance not yet processed is reported
    as unplaced and the result is marked truncated.

    Attributes:
        max_placements: Maximum number of instances to process.
        time_limit: Wall-clock limit in seconds.
    """

    max_placements: int | None = None
    time_limit: float | None = None

    def __post_init__(self) -> None:
        if self.max_placements is not None and self.max_placements < 0:
            raise ValueError("Maximum placements must be non-negative")
        if self.time_limit is not None and not self.time_limit > 0:
            raise ValueError("Time limit must be positive")

    @property
    def is_unlimited(self) -> bool:
        return self.max_placements is None and self.time_limit is None


@dataclass(frozen=True)
class BinPackingConfig:
    """Configuration for bin packing optimization.

    Attributes:
        sheet: Sheet dimensions, kerf and trim margin.
        budget: Optional iteration/time budget for each packing run.
        group_by_material: Whether BinPackingService packs each material
            tag onto its own sheets.
        min_offcut_size: Minimum dimension for a free rectangle to be
            reported as a reusable offcut.
    """

    sheet: SheetSettings = field(default_factory=SheetSettings)
    budget: PackingBudget = field(default_factory=PackingBudget)
    group_by_material: bool = True
    min_offcut_size: float = 100.0

    def __post_init__(self) -> None:
        if self.min_offcut_size < 0:
            raise ValueError("Minimum offcut size must be non-negative")


class UnplacedReason(str, Enum):
    """Why a piece instance ended up in the unplaced list."""

    TOO_LARGE = "too_large"
    BUDGET_EXHAUSTED = "budget_exhausted"


_REASON_TEXT = {
    UnplacedReason.TOO_LARGE: "too large for sheet",
    UnplacedReason.BUDGET_EXHAUSTED: "placement budget exhausted",
}


@dataclass(frozen=True)
class UnplacedPiece:
    """A piece instance that was not placed on any sheet.

    Attributes:
        piece_id: Identifier of the originating piece.
        instance_index: Zero-based index within the piece's quantity.
        label: Instance label (includes "i/N" when quantity > 1).
        reason: Why the instance was not placed.
    """

    piece_id: str
    instance_index: int
    label: str
    reason: UnplacedReason = UnplacedReason.TOO_LARGE

    @classmethod
    def from_instance(
        cls, instance: PieceInstance, reason: UnplacedReason
    ) -> UnplacedPiece:
        return cls(
            piece_id=instance.piece.piece_id,
            instance_index=instance.instance_index,
            label=instance.label,
            reason=reason,
        )

    @property
    def display_label(self) -> str:
        """Human-readable label, e.g. "Side 1/2 (too large for sheet)"."""
        return f"{self.label} ({_REASON_TEXT[self.reason]})"


@dataclass(frozen=True)
class PlacedPiece:
    """A piece instance placed at a specific position on a sheet.

    Coordinates are absolute on the sheet with a top-left origin, so a
    piece on a trimmed sheet never starts before the trim margin.

    Attributes:
        instance: The piece instance that was placed.
        x: Left edge position.
        y: Top edge position.
        width: Width as placed (the piece height when rotated).
        height: Height as placed (the piece width when rotated).
        sheet_index: Zero-based index of the sheet holding the piece.
        rotated: True if the piece is turned 90 degrees from its stored
            width/height.
    """

    instance: PieceInstance
    x: float
    y: float
    width: float
    height: float
    sheet_index: int
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")
        if self.sheet_index < 0:
            raise ValueError("Sheet index must be non-negative")

    @property
    def piece_id(self) -> str:
        return self.instance.piece.piece_id

    @property
    def instance_index(self) -> int:
        return self.instance.instance_index

    @property
    def label(self) -> str:
        return self.instance.label

    @property
    def material(self) -> str:
        return self.instance.piece.material

    @property
    def metadata(self) -> dict[str, Any] | None:
        return self.instance.piece.metadata

    @property
    def right_edge(self) -> float:
        """X coordinate of the piece's right edge."""
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        """Y coordinate of the piece's bottom edge."""
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class Offcut:
    """A free rectangle large enough to be worth keeping.

    Attributes:
        rect: The free region on the sheet.
        sheet_index: Index of the sheet the offcut comes from.
    """

    rect: FreeRect
    sheet_index: int

    @property
    def width(self) -> float:
        return self.rect.width

    @property
    def height(self) -> float:
        return self.rect.height

    @property
    def area(self) -> float:
        return self.rect.area


@dataclass(frozen=True)
class SheetLayout:
    """Layout of pieces on a single sheet.

    Attributes:
        sheet_index: Zero-based index of this sheet in the run.
        settings: Sheet settings used for the run.
        placements: Placed pieces in placement order.
        free_rects: Remaining free regions in tracker order.
    """

    sheet_index: int
    settings: SheetSettings
    placements: tuple[PlacedPiece, ...]
    free_rects: tuple[FreeRect, ...] = ()

    def __post_init__(self) -> None:
        if self.sheet_index < 0:
            raise ValueError("Sheet index must be non-negative")

    @property
    def used_area(self) -> float:
        """Total area covered by placed pieces."""
        return sum(p.area for p in self.placements)

    @property
    def total_area(self) -> float:
        """Full sheet area, not just the usable area."""
        return self.settings.total_area

    @property
    def utilization_percentage(self) -> float:
        """Percentage of the full sheet covered by pieces."""
        if self.total_area == 0:
            return 0.0
        return self.used_area / self.total_area * 100

    @property
    def waste_percentage(self) -> float:
        return 100.0 - self.utilization_percentage

    @property
    def piece_count(self) -> int:
        return len(self.placements)

    def offcuts(self, min_size: float) -> tuple[Offcut, ...]:
        """Free rectangles whose smaller side is at least min_size."""
        return tuple(
            Offcut(rect=rect, sheet_index=self.sheet_index)
            for rect in self.free_rects
            if min(rect.width, rect.height) >= min_size
        )


@dataclass(frozen=True)
class OptimizationResult:
    """Complete result of one packing run.

    Attributes:
        layouts: Sheet layouts in the order the sheets were opened.
        unplaced: Instances that were not placed, in report order.
        settings: Sheet settings used for the run.
        overall_utilization_percentage: Used area over total sheet area.
        truncated: True if a budget stopped the run before all instances
            were processed.
    """

    layouts: tuple[SheetLayout, ...]
    unplaced: tuple[UnplacedPiece, ...]
    settings: SheetSettings
    overall_utilization_percentage: float = 0.0
    truncated: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.overall_utilization_percentage <= 100 + 1e-9:
            raise ValueError("Utilization percentage must be between 0 and 100")

    @property
    def total_sheets(self) -> int:
        return len(self.layouts)

    @property
    def total_pieces_placed(self) -> int:
        return sum(layout.piece_count for layout in self.layouts)

    @property
    def used_area(self) -> float:
        return sum(layout.used_area for layout in self.layouts)

    @property
    def total_area(self) -> float:
        return sum(layout.total_area for layout in self.layouts)

    @property
    def placements(self) -> tuple[PlacedPiece, ...]:
        """All placements across sheets, sheet by sheet."""
        return tuple(p for layout in self.layouts for p in layout.placements)

    @property
    def unplaced_labels(self) -> list[str]:
        return [u.display_label for u in self.unplaced]


@dataclass(frozen=True)
class CutPlan:
    """Packing results for one or more material groups.

    Attributes:
        results: Results keyed by material tag, in first-seen order.
    """

    results: dict[str, OptimizationResult]

    @property
    def total_sheets(self) -> int:
        return sum(r.total_sheets for r in self.results.values())

    @property
    def total_pieces_placed(self) -> int:
        return sum(r.total_pieces_placed for r in self.results.values())

    @property
    def sheets_by_material(self) -> dict[str, int]:
        return {material: r.total_sheets for material, r in self.results.items()}

    @property
    def overall_utilization_percentage(self) -> float:
        """Area-weighted utilization across every material group."""
        total_area = sum(r.total_area for r in self.results.values())
        if total_area == 0:
            return 0.0
        used = sum(r.used_area for r in self.results.values())
        return used / total_area * 100

    @property
    def unplaced_labels(self) -> list[str]:
        return [label for r in self.results.values() for label in r.unplaced_labels]

    @property
    def truncated(self) -> bool:
        return any(r.truncated for r in self.results.values())
