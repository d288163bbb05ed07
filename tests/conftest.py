"""Pytest configuration and shared fixtures for sheet cutting tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests exercising the CLI or REST API end to end"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared configuration fixtures
# =============================================================================


@pytest.fixture
def kitchen_config_data() -> dict[str, Any]:
    """A small two-material project with one oversized piece."""
    return {
        "schema_version": "1.0",
        "sheet": {"width": 2440, "height": 1220, "kerf": 3.175},
        "pieces": [
            {
                "id": "side",
                "label": "Side",
                "width": 610,
                "height": 876,
                "quantity": 2,
                "orientation": "vertical",
                "material": "18mm plywood",
            },
            {
                "id": "shelf",
                "label": "Shelf",
                "width": 580,
                "height": 300,
                "quantity": 3,
                "material": "18mm plywood",
            },
            {
                "id": "back",
                "label": "Back",
                "width": 900,
                "height": 880,
                "material": "6mm hardboard",
            },
            {
                "id": "worktop",
                "label": "Worktop",
                "width": 3000,
                "height": 600,
                "orientation": "horizontal",
                "material": "18mm plywood",
            },
        ],
    }


@pytest.fixture
def simple_config_data() -> dict[str, Any]:
    """A project where every piece fits."""
    return {
        "schema_version": "1.0",
        "sheet": {"width": 2440, "height": 1220, "kerf": 3.175},
        "pieces": [
            {"id": "side", "label": "Side", "width": 610, "height": 876, "quantity": 2},
            {"id": "shelf", "label": "Shelf", "width": 580, "height": 300},
        ],
    }


@pytest.fixture
def write_config(tmp_path: Path):
    """Write configuration data to a JSON file and return its path."""

    def _write(data: Any, name: str = "config.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
