"""Value objects for the sheet cutting domain."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .exceptions import SheetConfigurationError

# Standard 4'x8' sheet in millimeters, 1/8" table saw kerf.
DEFAULT_SHEET_WIDTH = 2440.0
DEFAULT_SHEET_HEIGHT = 1220.0
DEFAULT_KERF = 3.175
DEFAULT_TRIM_MARGIN = 0.0


class OrientationConstraint(str, Enum):
    """Orientation constraint for a piece placed on a sheet.

    The sheet's x-axis runs along its width. Sheet grain is assumed to run
    along that axis, so the constraint names which piece dimension must be
    laid along x.

    Attributes:
        FIXED_ALONG_WIDTH: Piece width along sheet x-axis (never rotated).
        FIXED_ALONG_HEIGHT: Piece height along sheet x-axis (always rotated).
        UNCONSTRAINED: Either orientation; the packer picks the tighter fit.
    """

    FIXED_ALONG_WIDTH = "fixed_along_width"
    FIXED_ALONG_HEIGHT = "fixed_along_height"
    UNCONSTRAINED = "unconstrained"

    @classmethod
    def parse(cls, value: str | OrientationConstraint) -> OrientationConstraint:
        """Parse a constraint name, accepting grain direction aliases.

        Args:
            value: Constraint value or one of "horizontal", "vertical",
                "either", "none".

        Returns:
            The matching OrientationConstraint.

        Raises:
            ValueError: If the value is not recognized.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_")
        alias = _GRAIN_ALIASES.get(normalized)
        if alias is not None:
            return alias
        return cls(normalized)

    @property
    def allows_rotation(self) -> bool:
        """True if the packer may choose between both orientations."""
        return self is OrientationConstraint.UNCONSTRAINED


_GRAIN_ALIASES: dict[str, OrientationConstraint] = {
    "horizontal": OrientationConstraint.FIXED_ALONG_WIDTH,
    "vertical": OrientationConstraint.FIXED_ALONG_HEIGHT,
    "either": OrientationConstraint.UNCONSTRAINED,
    "none": OrientationConstraint.UNCONSTRAINED,
}


@dataclass(frozen=True)
class Piece:
    """A rectangular piece to be cut from sheet material.

    Attributes:
        piece_id: Identifier used to resolve placements back to the input.
        width: Required width (millimeters in the reference domain).
        height: Required height.
        quantity: Number of identical pieces to cut.
        orientation: Orientation constraint applied during placement.
        label: Display name. Falls back to piece_id when empty.
        material: Material or category tag used for grouping.
        metadata: Opaque data carried through to the output unchanged.
            Compared for equality but left out of the hash.
    """

    piece_id: str
    width: float
    height: float
    quantity: int = 1
    orientation: OrientationConstraint = OrientationConstraint.UNCONSTRAINED
    label: str = ""
    material: str = ""
    metadata: dict[str, Any] | None = field(default=None, hash=False)

    def __post_init__(self) -> None:
        if not self.piece_id:
            raise ValueError("Piece id must not be empty")
        if not (math.isfinite(self.width) and math.isfinite(self.height)):
            raise ValueError("Piece dimensions must be finite")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Piece dimensions must be positive")
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")

    @property
    def name(self) -> str:
        """Display name of the piece."""
        return self.label or self.piece_id

    @property
    def area(self) -> float:
        """Area of a single piece."""
        return self.width * self.height

    @property
    def is_square(self) -> bool:
        return self.width == self.height


@dataclass(frozen=True)
class PieceInstance:
    """One physical unit of a Piece, created by quantity expansion.

    Attributes:
        piece: The originating piece.
        instance_index: Zero-based index within the piece's quantity.
        input_order: Position in the expansion, used as a stable tie-breaker.
    """

    piece: Piece
    instance_index: int
    input_order: int

    def __post_init__(self) -> None:
        if not 0 <= self.instance_index < self.piece.quantity:
            raise ValueError("Instance index must be within piece quantity")
        if self.input_order < 0:
            raise ValueError("Input order must be non-negative")

    @property
    def label(self) -> str:
        """Label including instance numbering when quantity > 1."""
        if self.piece.quantity == 1:
            return self.piece.name
        return f"{self.piece.name} {self.instance_index + 1}/{self.piece.quantity}"

    @property
    def width(self) -> float:
        return self.piece.width

    @property
    def height(self) -> float:
        return self.piece.height

    @property
    def area(self) -> float:
        return self.piece.area

    @property
    def orientation(self) -> OrientationConstraint:
        return self.piece.orientation


@dataclass(frozen=True)
class SheetSettings:
    """Sheet dimensions and cutting allowances for one optimization run.

    Attributes:
        width: Full sheet width (x-axis).
        height: Full sheet height (y-axis).
        kerf: Minimum clearance between adjacent placed pieces.
        trim_margin: Unusable band trimmed from each of the four edges.

    Raises:
        SheetConfigurationError: If the settings leave no usable area.
    """

    width: float = DEFAULT_SHEET_WIDTH
    height: float = DEFAULT_SHEET_HEIGHT
    kerf: float = DEFAULT_KERF
    trim_margin: float = DEFAULT_TRIM_MARGIN

    def __post_init__(self) -> None:
        for name in ("width", "height", "kerf", "trim_margin"):
            if not math.isfinite(getattr(self, name)):
                raise SheetConfigurationError(f"Sheet {name} must be finite")
        if self.width <= 0:
            raise SheetConfigurationError("Sheet width must be positive")
        if self.height <= 0:
            raise SheetConfigurationError("Sheet height must be positive")
        if self.kerf < 0:
            raise SheetConfigurationError("Kerf must be non-negative")
        if self.trim_margin < 0:
            raise SheetConfigurationError("Trim margin must be non-negative")
        if self.usable_width <= 0 or self.usable_height <= 0:
            raise SheetConfigurationError(
                f"Trim margin {self.trim_margin} leaves no usable area on a "
                f"{self.width}x{self.height} sheet"
            )

    @property
    def usable_width(self) -> float:
        """Width available for placement after trimming both edges."""
        return self.width - (2 * self.trim_margin)

    @property
    def usable_height(self) -> float:
        """Height available for placement after trimming both edges."""
        return self.height - (2 * self.trim_margin)

    @property
    def usable_area(self) -> float:
        return self.usable_width * self.usable_height

    @property
    def total_area(self) -> float:
        """Area of the full sheet, including the trimmed band."""
        return self.width * self.height

    @property
    def origin(self) -> tuple[float, float]:
        """Top-left corner of the usable area."""
        return (self.trim_margin, self.trim_margin)


@dataclass(frozen=True)
class FreeRect:
    """Axis-aligned free region on a sheet (top-left origin)."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Free rectangle dimensions must be positive")

    @property
    def area(self) -> float:
        return self.width * self.height

    def can_hold(self, width: float, height: float) -> bool:
        """Check whether a width x height rectangle fits inside this region."""
        return width <= self.width and height <= self.height
