"""Custom exceptions and error handlers for the REST API."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from sheetcut.application.config import ConfigError


class CutPlanRejectedError(Exception):
    """Raised when the optimizer refuses a configuration."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Optimization failed: {errors}")


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers with the FastAPI app."""

    @app.exception_handler(ConfigError)
    async def config_error_handler(request: Request, exc: ConfigError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": exc.message,
                "error_type": exc.error_type,
                "details": exc.details or None,
            },
        )

    @app.exception_handler(CutPlanRejectedError)
    async def rejected_error_handler(
        request: Request, exc: CutPlanRejectedError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "error": "Cut plan optimization failed",
                "error_type": "optimization",
                "details": [{"message": e} for e in exc.errors],
            },
        )
