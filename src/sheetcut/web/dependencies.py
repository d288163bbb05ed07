"""FastAPI dependency injection for cut plan services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from sheetcut.application.commands import OptimizeCutPlanCommand


@lru_cache(maxsize=1)
def get_optimize_command() -> OptimizeCutPlanCommand:
    """Get cached OptimizeCutPlanCommand instance."""
    return OptimizeCutPlanCommand()


OptimizeCommandDep = Annotated[OptimizeCutPlanCommand, Depends(get_optimize_command)]
