"""Domain layer - core value objects and errors."""

from .exceptions import PackingInvariantError, SheetConfigurationError
from .value_objects import (
    DEFAULT_KERF,
    DEFAULT_SHEET_HEIGHT,
    DEFAULT_SHEET_WIDTH,
    DEFAULT_TRIM_MARGIN,
    FreeRect,
    OrientationConstraint,
    Piece,
    PieceInstance,
    SheetSettings,
)

__all__ = [
    "DEFAULT_KERF",
    "DEFAULT_SHEET_HEIGHT",
    "DEFAULT_SHEET_WIDTH",
    "DEFAULT_TRIM_MARGIN",
    "FreeRect",
    "OrientationConstraint",
    "PackingInvariantError",
    "Piece",
    "PieceInstance",
    "SheetConfigurationError",
    "SheetSettings",
]
