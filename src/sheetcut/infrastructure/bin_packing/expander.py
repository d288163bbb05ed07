"""Quantity expansion and feasibility filtering for the packer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from sheetcut.domain.value_objects import (
    OrientationConstraint,
    Piece,
    PieceInstance,
    SheetSettings,
)

from .models import UnplacedPiece, UnplacedReason

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpansionResult:
    """Output of expand_pieces.

    Attributes:
        instances: Feasible piece instances in input order.
        unplaced: One entry per repeat unit of each infeasible piece.
    """

    instances: tuple[PieceInstance, ...]
    unplaced: tuple[UnplacedPiece, ...]


def allowed_orientations(piece: Piece) -> tuple[bool, ...]:
    """Rotation flags admissible for a piece, normal orientation first.

    Square unconstrained pieces only report the normal orientation since
    rotating them does not change the placed footprint.
    """
    if piece.orientation is OrientationConstraint.FIXED_ALONG_WIDTH:
        return (False,)
    if piece.orientation is OrientationConstraint.FIXED_ALONG_HEIGHT:
        return (True,)
    if piece.orientation is OrientationConstraint.UNCONSTRAINED:
        return (False,) if piece.is_square else (False, True)
    raise ValueError(f"Unknown orientation constraint: {piece.orientation!r}")


def placed_size(piece: Piece, rotated: bool) -> tuple[float, float]:
    """Width and height of a piece as laid on the sheet."""
    if rotated:
        return piece.height, piece.width
    return piece.width, piece.height


def fits_empty_sheet(piece: Piece, settings: SheetSettings) -> bool:
    """Check whether any admissible orientation fits the usable sheet area."""
    for rotated in allowed_orientations(piece):
        width, height = placed_size(piece, rotated)
        if width <= settings.usable_width and height <= settings.usable_height:
            return True
    return False


def expand_pieces(
    pieces: Sequence[Piece],
    settings: SheetSettings,
) -> ExpansionResult:
    """Expand pieces by quantity and route oversized ones to unplaced.

    Feasibility is decided once per piece since the usable sheet
    dimensions are constant for a run.

    Args:
        pieces: Input pieces, possibly with quantity > 1.
        settings: Sheet settings for the run.

    Returns:
        ExpansionResult with feasible instances and unplaced entries.
    """
    instances: list[PieceInstance] = []
    unplaced: list[UnplacedPiece] = []
    order = 0

    for piece in pieces:
        feasible = fits_empty_sheet(piece, settings)
        if not feasible:
            logger.warning(
                "Piece '%s' (%sx%s, %s) exceeds usable sheet area %sx%s",
                piece.name,
                piece.width,
                piece.height,
                piece.orientation.value,
                settings.usable_width,
                settings.usable_height,
            )

        for index in range(piece.quantity):
            instance = PieceInstance(piece=piece, instance_index=index, input_order=order)
            order += 1
            if feasible:
                instances.append(instance)
            else:
                unplaced.append(
                    UnplacedPiece.from_instance(instance, UnplacedReason.TOO_LARGE)
                )

    return ExpansionResult(instances=tuple(instances), unplaced=tuple(unplaced))
