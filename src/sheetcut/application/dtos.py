"""Data transfer objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from sheetcut.infrastructure.bin_packing import BinPackingConfig, CutPlan


@dataclass
class CutPlanOutput:
    """Output of OptimizeCutPlanCommand.

    Attributes:
        plan: The packing results, or None when the run was rejected.
        config: Packing configuration the plan was produced with.
        errors: Blocking errors such as unusable sheet settings or
            duplicate piece ids, as "path: message" strings.
        warnings: Non-blocking warnings (unplaced pieces, truncation).
    """

    plan: CutPlan | None = None
    config: BinPackingConfig | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors and self.plan is not None
