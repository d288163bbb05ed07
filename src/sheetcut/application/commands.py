"""Application commands (use cases) for cut plan optimization."""

from __future__ import annotations

import logging

from sheetcut.application.config import (
    CutPlanConfiguration,
    config_to_bin_packing,
    config_to_pieces,
    validate_config,
)
from sheetcut.infrastructure.bin_packing import BinPackingService

from .dtos import CutPlanOutput

logger = logging.getLogger(__name__)


class OptimizeCutPlanCommand:
    """Command to turn a cut plan configuration into sheet layouts.

    The configuration goes through the same cross-field checks as
    `sheetcut validate`; any blocking error (unusable sheet settings,
    duplicate piece ids) is returned before a piece is placed. Pieces
    that cannot be placed become warnings next to a valid, possibly
    partial, plan.
    """

    def execute(self, config: CutPlanConfiguration) -> CutPlanOutput:
        """Execute the optimization.

        Args:
            config: A loaded and schema-valid configuration.

        Returns:
            CutPlanOutput with the plan, errors and warnings.
        """
        validation = validate_config(config)
        if not validation.is_valid:
            errors = [f"{e.path}: {e.message}" for e in validation.errors]
            logger.debug("Rejected configuration: %s", errors)
            return CutPlanOutput(errors=errors)

        packing_config = config_to_bin_packing(config)
        pieces = config_to_pieces(config)
        plan = BinPackingService(packing_config).optimize(pieces)

        warnings = [f"Not placed: {label}" for label in plan.unplaced_labels]
        if plan.truncated:
            warnings.append(
                "Packing budget exhausted; remaining pieces were not placed"
            )

        return CutPlanOutput(plan=plan, config=packing_config, warnings=warnings)
