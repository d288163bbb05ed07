"""Loading of cut plan configuration files.

Reads a JSON configuration from disk (or a dict), validates it against
CutPlanConfiguration and turns every failure into a ConfigError whose
details point at the offending JSON path.
"""

import json
import math
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from sheetcut.application.config.schema import CutPlanConfiguration


class ConfigError(Exception):
    """Exception raised for configuration-related errors.

    Attributes:
        message: The primary error message.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse or validation.
        path: Path to the configuration file, if any.
        details: Per-error details (JSON path, message, offending value)
            or the line/column of a JSON syntax error.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def format_json_path(loc: tuple[str | int, ...]) -> str:
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> format_json_path(("sheet", "kerf"))
        'sheet.kerf'
        >>> format_json_path(("pieces", 2, "width"))
        'pieces[2].width'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _detail_value(value: Any) -> Any:
    # JSON responses cannot carry inf or nan
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    return value


def validation_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": format_json_path(err["loc"]),
            "message": err["msg"],
            "value": _detail_value(err.get("input")),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def validation_message(details: list[dict[str, Any]]) -> str:
    lines = ["Configuration validation failed:"]
    for detail in details:
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']}")
    return "\n".join(lines)


def load_config_from_dict(
    data: dict[str, Any],
    path: Path | None = None,
) -> CutPlanConfiguration:
    """Validate a configuration held in a dictionary.

    Args:
        data: Parsed configuration data.
        path: Source file, used only for error reporting.

    Returns:
        A validated CutPlanConfiguration.

    Raises:
        ConfigError: If the data fails validation.
    """
    try:
        return CutPlanConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = validation_details(e)
        raise ConfigError(
            message=validation_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def load_config(path: Path) -> CutPlanConfiguration:
    """Load and validate a cut plan configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file.

    Returns:
        A validated CutPlanConfiguration.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in config file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(
            message=f"Config file must contain a JSON object: {path}",
            error_type="validation",
            path=path,
            details=[{"path": "", "message": "Expected a JSON object"}],
        )

    return load_config_from_dict(data, path=path)
