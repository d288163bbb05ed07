"""Per-material coordination of packing runs."""

from __future__ import annotations

import logging
from typing import Sequence

from sheetcut.domain.value_objects import Piece

from .models import BinPackingConfig, CutPlan
from .packer import GuillotineBinPacker

logger = logging.getLogger(__name__)


class BinPackingService:
    """Coordinates bin packing optimization across material groups.

    Projects usually mix materials (e.g. 18mm carcass plywood and 6mm
    backs) that cannot share a sheet. This service groups pieces by their
    material tag and runs an independent packing pass for each group.

    Attributes:
        config: Bin packing configuration.
        packer: GuillotineBinPacker instance used for every group.
    """

    def __init__(self, config: BinPackingConfig | None = None) -> None:
        """Initialize service with configuration.

        Args:
            config: Bin packing configuration with sheet settings and options.
        """
        self.config = config or BinPackingConfig()
        self.packer = GuillotineBinPacker(self.config)

    def optimize(self, pieces: Sequence[Piece]) -> CutPlan:
        """Optimize a piece list, one packing pass per material group.

        Args:
            pieces: All pieces of the project.

        Returns:
            CutPlan with one OptimizationResult per material, in the order
            each material first appears. With grouping disabled, a single
            result is keyed by the empty string.
        """
        if not pieces:
            return CutPlan(results={})

        groups = self._group_by_material(pieces)

        logger.info(
            "Optimizing %d pieces across %d material groups",
            len(pieces),
            len(groups),
        )

        results = {}
        for material, group_pieces in groups.items():
            result = self.packer.pack(group_pieces)

            logger.debug(
                "Material '%s': %d pieces -> %d sheets, %d unplaced",
                material,
                len(group_pieces),
                result.total_sheets,
                len(result.unplaced),
            )
            results[material] = result

        return CutPlan(results=results)

    def _group_by_material(
        self,
        pieces: Sequence[Piece],
    ) -> dict[str, list[Piece]]:
        """Group pieces by material tag, preserving first-seen order."""
        if not self.config.group_by_material:
            return {"": list(pieces)}

        groups: dict[str, list[Piece]] = {}
        for piece in pieces:
            groups.setdefault(piece.material, []).append(piece)
        return groups
