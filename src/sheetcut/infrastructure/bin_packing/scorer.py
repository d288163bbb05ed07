"""Best-short-side-fit scoring of free regions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from sheetcut.domain.value_objects import FreeRect, PieceInstance

from .expander import allowed_orientations, placed_size


@dataclass(frozen=True)
class FitCandidate:
    """Winning region/orientation for one piece instance on one sheet.

    Attributes:
        region_index: Index of the chosen region in the sheet's list.
        rotated: True if the piece is placed with width and height swapped.
        width: Placed width.
        height: Placed height.
        score: Smaller of the two leftover dimensions (lower is tighter).
    """

    region_index: int
    rotated: bool
    width: float
    height: float
    score: float


def find_best_fit(
    instance: PieceInstance,
    regions: Sequence[FreeRect],
) -> FitCandidate | None:
    """Pick the tightest region/orientation for a piece instance.

    Every admissible orientation is evaluated against every region. Only
    a strictly lower score replaces the current best, so ties go to the
    earlier region and, within a region, to the non-rotated orientation.

    Args:
        instance: Piece instance to place.
        regions: Free regions of one sheet in list order.

    Returns:
        The best candidate, or None if nothing fits.
    """
    orientations = allowed_orientations(instance.piece)
    best: FitCandidate | None = None

    for index, region in enumerate(regions):
        for rotated in orientations:
            width, height = placed_size(instance.piece, rotated)
            if not region.can_hold(width, height):
                continue
            score = min(region.width - width, region.height - height)
            if best is None or score < best.score:
                best = FitCandidate(
                    region_index=index,
                    rotated=rotated,
                    width=width,
                    height=height,
                    score=score,
                )

    return best
