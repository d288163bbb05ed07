"""Validation structures and cutting advisories for configurations.

Schema validation happens when a configuration is loaded. The checks here
cover cross-field rules (unique piece ids) and advisories about pieces
that will not fit the configured sheet.
"""

from dataclasses import dataclass, field
from typing import Any

from sheetcut.application.config.adapter import config_to_piece, config_to_sheet_settings
from sheetcut.application.config.schema import CutPlanConfiguration
from sheetcut.domain.exceptions import SheetConfigurationError
from sheetcut.infrastructure.bin_packing import fits_empty_sheet


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g. "pieces[2].id").
        message: Human-readable description of the error.
        value: The invalid value that caused the error.
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field.
        message: Human-readable description of the concern.
        suggestion: Optional suggested remediation.
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings.

    Attributes:
        errors: Blocking validation errors.
        warnings: Non-blocking validation warnings.
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 valid, 1 errors, 2 valid with warnings."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self


def validate_config(config: CutPlanConfiguration) -> ValidationResult:
    """Run cross-field checks and cutting advisories on a configuration.

    Args:
        config: A schema-valid configuration.

    Returns:
        ValidationResult with errors and warnings.
    """
    result = ValidationResult()

    try:
        settings = config_to_sheet_settings(config.sheet)
    except SheetConfigurationError as e:
        result.add_error("sheet", str(e))
        return result

    seen: dict[str, int] = {}
    for index, piece_config in enumerate(config.pieces):
        path = f"pieces[{index}]"
        if piece_config.id in seen:
            result.add_error(
                f"{path}.id",
                f"Duplicate piece id (first used by pieces[{seen[piece_config.id]}])",
                piece_config.id,
            )
        else:
            seen[piece_config.id] = index

        piece = config_to_piece(piece_config)
        if not fits_empty_sheet(piece, settings):
            result.add_warning(
                path,
                f"'{piece.name}' ({piece.width}x{piece.height}, "
                f"{piece.orientation.value}) does not fit the usable sheet area "
                f"{settings.usable_width}x{settings.usable_height}",
                suggestion=(
                    "Use a larger sheet or relax the orientation constraint"
                    if not piece.orientation.allows_rotation
                    else "Use a larger sheet or split the piece"
                ),
            )

        if settings.kerf >= min(piece.width, piece.height):
            result.add_warning(
                path,
                f"Kerf {settings.kerf} is not smaller than the piece's shortest side",
            )

    return result
