"""Free-region bookkeeping for a single open sheet.

Each open sheet keeps an ordered list of free rectangles. Placing a piece
consumes one rectangle by index and replaces it with at most two
leftovers produced by a guillotine split.

Split rule (shorter leftover axis), with the piece at the region's
top-left corner:

    leftover_w = region.width  - placed_width  - kerf
    leftover_h = region.height - placed_height - kerf

    leftover_w <  leftover_h:  right strip is placed_height tall,
                               lower strip spans the full region width
    leftover_w >= leftover_h:  right strip spans the full region height,
                               lower strip is placed_width wide

Leftovers with a non-positive dimension are dropped.
"""

from __future__ import annotations

import logging

from sheetcut.domain.exceptions import PackingInvariantError
from sheetcut.domain.value_objects import FreeRect, SheetSettings

logger = logging.getLogger(__name__)


class FreeRegionTracker:
    """Ordered collection of free rectangles on one sheet.

    The list order is part of the packer's tie-breaking contract: new
    leftovers are appended at the end, right strip before lower strip.

    Attributes:
        kerf: Clearance subtracted from each leftover.
    """

    def __init__(self, settings: SheetSettings) -> None:
        """Seed the tracker with the sheet's full usable area.

        Args:
            settings: Sheet settings for the run.
        """
        self.kerf = settings.kerf
        origin_x, origin_y = settings.origin
        self._regions: list[FreeRect] = [
            FreeRect(
                x=origin_x,
                y=origin_y,
                width=settings.usable_width,
                height=settings.usable_height,
            )
        ]

    def __len__(self) -> int:
        return len(self._regions)

    def __getitem__(self, index: int) -> FreeRect:
        return self._regions[index]

    @property
    def regions(self) -> tuple[FreeRect, ...]:
        """Snapshot of the current free rectangles in list order."""
        return tuple(self._regions)

    def consume_and_split(
        self,
        index: int,
        placed_width: float,
        placed_height: float,
    ) -> FreeRect:
        """Consume a region for a piece placed at its top-left corner.

        Args:
            index: Index of the region in the current list.
            placed_width: Width of the piece as placed.
            placed_height: Height of the piece as placed.

        Returns:
            The consumed region (its x/y is the piece position).

        Raises:
            PackingInvariantError: If the index is out of range or the
                piece does not fit the region.
        """
        if not 0 <= index < len(self._regions):
            raise PackingInvariantError(
                f"Free region index {index} out of range ({len(self._regions)} regions)"
            )
        region = self._regions[index]
        if not region.can_hold(placed_width, placed_height):
            raise PackingInvariantError(
                f"Piece {placed_width}x{placed_height} does not fit free region "
                f"{region.width}x{region.height} at ({region.x}, {region.y})"
            )

        del self._regions[index]
        leftovers = split_region(region, placed_width, placed_height, self.kerf)
        self._regions.extend(leftovers)

        logger.debug(
            "Split %sx%s region at (%s, %s) into %d leftover(s)",
            region.width,
            region.height,
            region.x,
            region.y,
            len(leftovers),
        )
        return region


def split_region(
    region: FreeRect,
    placed_width: float,
    placed_height: float,
    kerf: float,
) -> list[FreeRect]:
    """Guillotine split of a region after placing a piece at its corner.

    Args:
        region: The region being consumed.
        placed_width: Width of the piece as placed.
        placed_height: Height of the piece as placed.
        kerf: Clearance between the piece and each leftover.

    Returns:
        Zero, one or two leftovers: right strip first, then lower strip.
    """
    leftover_w = region.width - placed_width - kerf
    leftover_h = region.height - placed_height - kerf
    right_x = region.x + placed_width + kerf
    lower_y = region.y + placed_height + kerf

    if leftover_w < leftover_h:
        right_height = placed_height
        lower_width = region.width
    else:
        right_height = region.height
        lower_width = placed_width

    leftovers: list[FreeRect] = []
    if leftover_w > 0:
        leftovers.append(
            FreeRect(x=right_x, y=region.y, width=leftover_w, height=right_height)
        )
    if leftover_h > 0:
        leftovers.append(
            FreeRect(x=region.x, y=lower_y, width=lower_width, height=leftover_h)
        )
    return leftovers
