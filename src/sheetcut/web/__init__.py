"""FastAPI REST API for cut plan optimization.

This module provides a REST API for optimizing sheet layouts and
validating cut plan configurations.

Usage:
    uvicorn sheetcut.web:app --reload
"""

from sheetcut.web.app import app, create_app

__all__ = ["app", "create_app"]
