"""Tests for bin packing data models and GuillotineBinPacker algorithm.

Tests cover:
- Piece, SheetSettings and result model validation and properties
- Quantity expansion and oversized piece filtering
- Free region splitting along the shorter leftover axis
- Best-short-side-fit scoring and tie-breaking
- Kerf handling between pieces
- Sheet overflow and multi-sheet packing
- Placement budgets and partial results
- BinPackingService multi-material coordination
"""

from __future__ import annotations

import pytest

from sheetcut.domain.exceptions import PackingInvariantError, SheetConfigurationError
from sheetcut.domain.value_objects import (
    FreeRect,
    OrientationConstraint,
    Piece,
    PieceInstance,
    SheetSettings,
)
from sheetcut.infrastructure.bin_packing import (
    BinPackingConfig,
    BinPackingService,
    CutPlan,
    FreeRegionTracker,
    GuillotineBinPacker,
    PackingBudget,
    PlacedPiece,
    SheetLayout,
    UnplacedPiece,
    UnplacedReason,
    calculate_overall_utilization,
    expand_pieces,
    find_best_fit,
    fits_empty_sheet,
    split_region,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def default_settings() -> SheetSettings:
    """Create default 2440x1220 sheet settings with 3.175 kerf."""
    return SheetSettings()


@pytest.fixture
def no_kerf_settings() -> SheetSettings:
    """Create 2440x1220 sheet settings without kerf."""
    return SheetSettings(kerf=0.0)


@pytest.fixture
def packer() -> GuillotineBinPacker:
    """Create a packer with default configuration."""
    return GuillotineBinPacker()


@pytest.fixture
def cabinet_side() -> Piece:
    """Create a 610x876 unconstrained cabinet side."""
    return Piece(piece_id="side", width=610.0, height=876.0, label="Side")


def _packer_for(settings: SheetSettings, **kwargs) -> GuillotineBinPacker:
    return GuillotineBinPacker(BinPackingConfig(sheet=settings, **kwargs))


# =============================================================================
# Domain model Tests
# =============================================================================


class TestOrientationConstraint:
    """Tests for OrientationConstraint parsing."""

    def test_parse_canonical_values(self) -> None:
        """Canonical names parse to the matching member."""
        assert (
            OrientationConstraint.parse("fixed_along_width")
            is OrientationConstraint.FIXED_ALONG_WIDTH
        )
        assert (
            OrientationConstraint.parse("fixed-along-height")
            is OrientationConstraint.FIXED_ALONG_HEIGHT
        )

    def test_parse_grain_aliases(self) -> None:
        """Grain direction aliases map onto constraints."""
        assert (
            OrientationConstraint.parse("horizontal")
            is OrientationConstraint.FIXED_ALONG_WIDTH
        )
        assert (
            OrientationConstraint.parse("Vertical")
            is OrientationConstraint.FIXED_ALONG_HEIGHT
        )
        assert OrientationConstraint.parse("either") is OrientationConstraint.UNCONSTRAINED
        assert OrientationConstraint.parse("none") is OrientationConstraint.UNCONSTRAINED

    def test_parse_unknown_raises(self) -> None:
        """Unknown names are rejected."""
        with pytest.raises(ValueError):
            OrientationConstraint.parse("diagonal")

    def test_only_unconstrained_allows_rotation(self) -> None:
        """Fixed constraints never let the packer choose."""
        assert OrientationConstraint.UNCONSTRAINED.allows_rotation
        assert not OrientationConstraint.FIXED_ALONG_WIDTH.allows_rotation
        assert not OrientationConstraint.FIXED_ALONG_HEIGHT.allows_rotation


class TestPiece:
    """Tests for Piece validation and properties."""

    def test_defaults(self) -> None:
        """Test default quantity, orientation and label fallback."""
        piece = Piece(piece_id="p1", width=100.0, height=50.0)
        assert piece.quantity == 1
        assert piece.orientation is OrientationConstraint.UNCONSTRAINED
        assert piece.name == "p1"
        assert piece.area == 5000.0

    @pytest.mark.parametrize(
        "width,height",
        [(0.0, 10.0), (10.0, -1.0), (float("inf"), 10.0), (10.0, float("nan"))],
    )
    def test_invalid_dimensions(self, width: float, height: float) -> None:
        """Dimensions must be finite and positive."""
        with pytest.raises(ValueError):
            Piece(piece_id="p", width=width, height=height)

    def test_invalid_quantity(self) -> None:
        """Quantity below one is rejected."""
        with pytest.raises(ValueError, match="Quantity"):
            Piece(piece_id="p", width=10.0, height=10.0, quantity=0)

    def test_empty_id(self) -> None:
        """Pieces need an identifier."""
        with pytest.raises(ValueError, match="id"):
            Piece(piece_id="", width=10.0, height=10.0)

    def test_instance_labels(self) -> None:
        """Instance labels carry i/N numbering only when quantity > 1."""
        single = Piece(piece_id="top", width=10.0, height=10.0, label="Top")
        multi = Piece(piece_id="shelf", width=10.0, height=10.0, quantity=3, label="Shelf")
        assert PieceInstance(single, 0, 0).label == "Top"
        assert PieceInstance(multi, 1, 1).label == "Shelf 2/3"

    def test_instance_index_bounds(self) -> None:
        """Instance index must lie within the quantity."""
        piece = Piece(piece_id="p", width=10.0, height=10.0, quantity=2)
        with pytest.raises(ValueError):
            PieceInstance(piece, 2, 0)

    def test_hashable_with_metadata(self) -> None:
        """Pieces carrying metadata can be used in sets and as dict keys."""
        piece = Piece(piece_id="p", width=10.0, height=20.0, metadata={"edge": ["front"]})
        same = Piece(piece_id="p", width=10.0, height=20.0, metadata={"edge": ["front"]})
        other = Piece(piece_id="p", width=10.0, height=20.0, metadata={"edge": ["back"]})
        assert hash(piece) == hash(same)
        assert piece == same
        assert piece != other
        assert len({piece, same, other}) == 2
        assert len({PieceInstance(piece, 0, 0), PieceInstance(same, 0, 0)}) == 1


class TestSheetSettings:
    """Tests for SheetSettings validation."""

    def test_default_values(self) -> None:
        """Test default sheet settings values."""
        settings = SheetSettings()
        assert settings.width == 2440.0
        assert settings.height == 1220.0
        assert settings.kerf == 3.175
        assert settings.trim_margin == 0.0

    def test_usable_dimensions(self) -> None:
        """Trim margin is removed from all four edges."""
        settings = SheetSettings(width=2440.0, height=1220.0, trim_margin=10.0)
        assert settings.usable_width == 2420.0
        assert settings.usable_height == 1200.0
        assert settings.usable_area == 2420.0 * 1200.0
        assert settings.total_area == 2440.0 * 1220.0
        assert settings.origin == (10.0, 10.0)

    def test_zero_kerf_allowed(self) -> None:
        """A zero kerf is a valid setting."""
        assert SheetSettings(kerf=0.0).kerf == 0.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"width": 0.0},
            {"height": -100.0},
            {"kerf": -1.0},
            {"trim_margin": -0.5},
            {"width": 100.0, "height": 100.0, "trim_margin": 50.0},
            {"width": float("inf")},
        ],
    )
    def test_invalid_settings(self, kwargs: dict) -> None:
        """Unusable settings raise SheetConfigurationError."""
        with pytest.raises(SheetConfigurationError):
            SheetSettings(**kwargs)

    def test_configuration_error_is_value_error(self) -> None:
        """Callers catching ValueError also catch configuration errors."""
        assert issubclass(SheetConfigurationError, ValueError)


class TestResultModels:
    """Tests for PlacedPiece, SheetLayout and UnplacedPiece."""

    def test_placed_piece_edges(self, cabinet_side: Piece) -> None:
        """Test right/bottom edge calculations."""
        placed = PlacedPiece(
            instance=PieceInstance(cabinet_side, 0, 0),
            x=10.0,
            y=20.0,
            width=610.0,
            height=876.0,
            sheet_index=0,
        )
        assert placed.right_edge == 620.0
        assert placed.bottom_edge == 896.0
        assert placed.piece_id == "side"
        assert placed.label == "Side"

    def test_placed_piece_with_metadata_is_hashable(self) -> None:
        """Placements of pieces with metadata can be collected in a set."""
        piece = Piece(piece_id="door", width=400.0, height=700.0, metadata={"hinge": "left"})
        placed = PlacedPiece(
            instance=PieceInstance(piece, 0, 0),
            x=0.0,
            y=0.0,
            width=400.0,
            height=700.0,
            sheet_index=0,
        )
        assert {placed} == {placed}
        assert placed.metadata == {"hinge": "left"}

    def test_placed_piece_negative_position(self, cabinet_side: Piece) -> None:
        """Negative coordinates are rejected."""
        with pytest.raises(ValueError):
            PlacedPiece(
                instance=PieceInstance(cabinet_side, 0, 0),
                x=-1.0,
                y=0.0,
                width=610.0,
                height=876.0,
                sheet_index=0,
            )

    def test_layout_utilization_uses_full_sheet(self, cabinet_side: Piece) -> None:
        """Utilization divides by the full sheet, not the usable area."""
        settings = SheetSettings(width=1000.0, height=1000.0, trim_margin=100.0)
        piece = Piece(piece_id="sq", width=500.0, height=500.0)
        layout = SheetLayout(
            sheet_index=0,
            settings=settings,
            placements=(
                PlacedPiece(PieceInstance(piece, 0, 0), 100.0, 100.0, 500.0, 500.0, 0),
            ),
        )
        assert layout.used_area == 250000.0
        assert layout.total_area == 1000000.0
        assert layout.utilization_percentage == pytest.approx(25.0)
        assert layout.waste_percentage == pytest.approx(75.0)

    def test_offcuts_filter_by_short_side(self, default_settings: SheetSettings) -> None:
        """Only free rectangles with both sides >= min_size are offcuts."""
        layout = SheetLayout(
            sheet_index=0,
            settings=default_settings,
            placements=(),
            free_rects=(FreeRect(0, 0, 500, 50), FreeRect(0, 100, 300, 200)),
        )
        offcuts = layout.offcuts(100.0)
        assert len(offcuts) == 1
        assert offcuts[0].width == 300
        assert offcuts[0].height == 200

    def test_unplaced_display_label(self) -> None:
        """Display labels state the reason."""
        too_large = UnplacedPiece("top", 0, "Top")
        skipped = UnplacedPiece("top", 0, "Top", UnplacedReason.BUDGET_EXHAUSTED)
        assert too_large.display_label == "Top (too large for sheet)"
        assert skipped.display_label == "Top (placement budget exhausted)"

    def test_budget_validation(self) -> None:
        """Budgets must be non-negative and time limits positive."""
        assert PackingBudget().is_unlimited
        with pytest.raises(ValueError):
            PackingBudget(max_placements=-1)
        with pytest.raises(ValueError):
            PackingBudget(time_limit=0)


# =============================================================================
# Expansion Tests
# =============================================================================


class TestExpandPieces:
    """Tests for quantity expansion and feasibility filtering."""

    def test_expands_quantity_in_input_order(self, default_settings: SheetSettings) -> None:
        """Each repeat unit becomes an instance with a running input order."""
        pieces = [
            Piece(piece_id="a", width=100.0, height=100.0, quantity=2),
            Piece(piece_id="b", width=200.0, height=100.0),
        ]
        result = expand_pieces(pieces, default_settings)
        assert [(i.piece.piece_id, i.instance_index) for i in result.instances] == [
            ("a", 0),
            ("a", 1),
            ("b", 0),
        ]
        assert [i.input_order for i in result.instances] == [0, 1, 2]
        assert result.unplaced == ()

    def test_oversized_piece_unplaced_per_instance(
        self, default_settings: SheetSettings
    ) -> None:
        """An infeasible piece contributes one unplaced entry per unit."""
        pieces = [
            Piece(
                piece_id="top",
                width=3000.0,
                height=500.0,
                quantity=2,
                orientation=OrientationConstraint.FIXED_ALONG_WIDTH,
                label="Top",
            )
        ]
        result = expand_pieces(pieces, default_settings)
        assert result.instances == ()
        assert [u.label for u in result.unplaced] == ["Top 1/2", "Top 2/2"]
        assert all(u.reason is UnplacedReason.TOO_LARGE for u in result.unplaced)

    def test_feasibility_respects_orientation(
        self, default_settings: SheetSettings
    ) -> None:
        """A piece too tall upright fits only if it may be rotated."""
        upright = dict(piece_id="p", width=600.0, height=2000.0)
        assert fits_empty_sheet(Piece(**upright), default_settings)
        assert not fits_empty_sheet(
            Piece(**upright, orientation=OrientationConstraint.FIXED_ALONG_WIDTH),
            default_settings,
        )
        assert fits_empty_sheet(
            Piece(**upright, orientation=OrientationConstraint.FIXED_ALONG_HEIGHT),
            default_settings,
        )

    def test_feasibility_uses_usable_area(self) -> None:
        """Trim margin shrinks the feasible size."""
        settings = SheetSettings(width=1000.0, height=1000.0, trim_margin=10.0)
        assert fits_empty_sheet(Piece(piece_id="p", width=980.0, height=980.0), settings)
        assert not fits_empty_sheet(
            Piece(piece_id="p", width=981.0, height=100.0), settings
        )


# =============================================================================
# Free region Tests
# =============================================================================


class TestSplitRegion:
    """Tests for the shorter-leftover-axis guillotine split."""

    def test_horizontal_leftover_shorter_keeps_full_height_right_strip(self) -> None:
        """leftover_w >= leftover_h: right strip spans the full region height."""
        leftovers = split_region(FreeRect(0, 0, 100, 50), 30, 20, kerf=0)
        assert leftovers == [FreeRect(30, 0, 70, 50), FreeRect(0, 20, 30, 30)]

    def test_vertical_leftover_longer_keeps_full_width_lower_strip(self) -> None:
        """leftover_w < leftover_h: lower strip spans the full region width."""
        leftovers = split_region(FreeRect(0, 0, 50, 100), 20, 30, kerf=0)
        assert leftovers == [FreeRect(20, 0, 30, 30), FreeRect(0, 30, 50, 70)]

    def test_kerf_offsets_leftovers(self) -> None:
        """Leftovers start one kerf away from the piece."""
        right, lower = split_region(FreeRect(10, 10, 100, 100), 40, 60, kerf=5)
        assert right.x == 55
        assert right.width == 55
        assert lower.y == 75
        assert lower.height == 35

    def test_degenerate_leftovers_dropped(self) -> None:
        """Zero or negative leftovers are not kept."""
        assert split_region(FreeRect(0, 0, 100, 100), 100, 100, kerf=0) == []
        assert split_region(FreeRect(0, 0, 100, 100), 98, 50, kerf=3) == [
            FreeRect(0, 53, 100, 47)
        ]


class TestFreeRegionTracker:
    """Tests for FreeRegionTracker bookkeeping."""

    def test_seeded_with_usable_area(self) -> None:
        """A new tracker holds one region at the trim origin."""
        tracker = FreeRegionTracker(SheetSettings(trim_margin=10.0))
        assert tracker.regions == (FreeRect(10.0, 10.0, 2420.0, 1200.0),)

    def test_consume_replaces_region_with_leftovers(self) -> None:
        """Consuming removes the region and appends leftovers at the end."""
        tracker = FreeRegionTracker(SheetSettings(width=100.0, height=50.0, kerf=0.0))
        consumed = tracker.consume_and_split(0, 30, 20)
        assert consumed == FreeRect(0.0, 0.0, 100.0, 50.0)
        assert tracker.regions == (FreeRect(30.0, 0.0, 70.0, 50.0), FreeRect(0.0, 20.0, 30.0, 30.0))

        tracker.consume_and_split(0, 70, 50)
        assert tracker.regions == (FreeRect(0.0, 20.0, 30.0, 30.0),)

    def test_consume_bad_index_raises(self) -> None:
        """An out-of-range index is an invariant violation."""
        tracker = FreeRegionTracker(SheetSettings())
        with pytest.raises(PackingInvariantError):
            tracker.consume_and_split(1, 10, 10)

    def test_consume_oversized_piece_raises(self) -> None:
        """A piece larger than its region is an invariant violation."""
        tracker = FreeRegionTracker(SheetSettings(width=100.0, height=100.0))
        with pytest.raises(PackingInvariantError):
            tracker.consume_and_split(0, 101, 10)
        assert len(tracker) == 1


# =============================================================================
# Scorer Tests
# =============================================================================


class TestFindBestFit:
    """Tests for best-short-side-fit scoring."""

    def test_picks_tightest_region(self) -> None:
        """The region with the smallest short-side leftover wins."""
        piece = Piece(piece_id="p", width=50.0, height=50.0)
        regions = [FreeRect(0, 0, 200, 200), FreeRect(300, 0, 60, 200)]
        candidate = find_best_fit(PieceInstance(piece, 0, 0), regions)
        assert candidate is not None
        assert candidate.region_index == 1
        assert candidate.score == 10

    def test_tie_goes_to_earlier_region(self) -> None:
        """Equal scores keep the first region."""
        piece = Piece(piece_id="p", width=50.0, height=50.0)
        regions = [FreeRect(0, 0, 100, 100), FreeRect(200, 0, 100, 100)]
        candidate = find_best_fit(PieceInstance(piece, 0, 0), regions)
        assert candidate.region_index == 0

    def test_tie_prefers_normal_orientation(self) -> None:
        """Equal scores within a region keep the non-rotated placement."""
        piece = Piece(piece_id="p", width=50.0, height=80.0)
        candidate = find_best_fit(PieceInstance(piece, 0, 0), [FreeRect(0, 0, 100, 100)])
        assert candidate.rotated is False
        assert (candidate.width, candidate.height) == (50.0, 80.0)

    def test_rotation_when_only_rotated_fits(self) -> None:
        """An unconstrained piece rotates when that is the only fit."""
        piece = Piece(piece_id="p", width=1220.0, height=2000.0)
        candidate = find_best_fit(
            PieceInstance(piece, 0, 0), [FreeRect(0, 0, 2440, 1220)]
        )
        assert candidate.rotated is True
        assert (candidate.width, candidate.height) == (2000.0, 1220.0)

    def test_fixed_orientation_never_rotates(self) -> None:
        """A fixed-along-width piece that only fits rotated gets no candidate."""
        piece = Piece(
            piece_id="p",
            width=1220.0,
            height=2000.0,
            orientation=OrientationConstraint.FIXED_ALONG_WIDTH,
        )
        assert find_best_fit(PieceInstance(piece, 0, 0), [FreeRect(0, 0, 2440, 1220)]) is None

    def test_no_regions(self) -> None:
        """An exhausted sheet offers nothing."""
        piece = Piece(piece_id="p", width=10.0, height=10.0)
        assert find_best_fit(PieceInstance(piece, 0, 0), []) is None


# =============================================================================
# GuillotineBinPacker Tests
# =============================================================================


class TestGuillotineBinPacker:
    """Tests for the sheet allocation loop."""

    def test_empty_input(self, packer: GuillotineBinPacker) -> None:
        """No pieces means no sheets and nothing unplaced."""
        result = packer.pack([])
        assert result.total_sheets == 0
        assert result.total_pieces_placed == 0
        assert result.unplaced == ()
        assert result.overall_utilization_percentage == 0.0

    def test_single_piece(self, packer: GuillotineBinPacker, cabinet_side: Piece) -> None:
        """One cabinet side fits on one sheet at the origin."""
        result = packer.pack([cabinet_side])
        assert result.total_sheets == 1
        assert result.total_pieces_placed == 1
        assert result.unplaced == ()

        placed = result.layouts[0].placements[0]
        assert (placed.x, placed.y) == (0.0, 0.0)
        assert placed.rotated is False
        assert (placed.width, placed.height) == (610.0, 876.0)

    def test_free_rects_after_single_piece(
        self, packer: GuillotineBinPacker, cabinet_side: Piece
    ) -> None:
        """Remaining free rectangles follow the split rule."""
        result = packer.pack([cabinet_side])
        right, lower = result.layouts[0].free_rects
        assert right.x == pytest.approx(613.175)
        assert right.width == pytest.approx(1826.825)
        assert right.height == 1220.0
        assert lower.y == pytest.approx(879.175)
        assert lower.width == 610.0
        assert lower.height == pytest.approx(340.825)

    def test_two_half_sheets_fill_sheet(self, no_kerf_settings: SheetSettings) -> None:
        """Two 1220 squares with no kerf fill one sheet completely."""
        piece = Piece(piece_id="half", width=1220.0, height=1220.0, quantity=2)
        result = _packer_for(no_kerf_settings).pack([piece])

        assert result.total_sheets == 1
        assert result.overall_utilization_percentage == pytest.approx(100.0)
        assert [(p.x, p.y) for p in result.placements] == [(0.0, 0.0), (1220.0, 0.0)]
        assert result.layouts[0].free_rects == ()

    def test_piece_too_wide_for_fixed_orientation(self, packer: GuillotineBinPacker) -> None:
        """A fixed piece exceeding the sheet width is unplaced; no sheet opens."""
        piece = Piece(
            piece_id="top",
            width=3000.0,
            height=500.0,
            orientation=OrientationConstraint.FIXED_ALONG_WIDTH,
            label="Countertop",
        )
        result = packer.pack([piece])
        assert result.total_sheets == 0
        assert result.total_pieces_placed == 0
        assert result.unplaced_labels == ["Countertop (too large for sheet)"]

    def test_fixed_along_height_is_rotated(self, packer: GuillotineBinPacker) -> None:
        """A fixed-along-height piece is always placed rotated."""
        piece = Piece(
            piece_id="door",
            width=600.0,
            height=900.0,
            orientation=OrientationConstraint.FIXED_ALONG_HEIGHT,
        )
        placed = packer.pack([piece]).placements[0]
        assert placed.rotated is True
        assert (placed.width, placed.height) == (900.0, 600.0)

    def test_sheet_overflow(self, packer: GuillotineBinPacker) -> None:
        """Six rotated cabinet sides need more than one sheet."""
        piece = Piece(
            piece_id="side",
            width=610.0,
            height=876.0,
            quantity=6,
            orientation=OrientationConstraint.FIXED_ALONG_HEIGHT,
        )
        result = packer.pack([piece])
        assert result.total_sheets >= 2
        assert result.total_pieces_placed == 6
        assert result.unplaced == ()
        assert [layout.piece_count for layout in result.layouts] == [2, 2, 2]
        assert all(p.rotated for p in result.placements)

    def test_kerf_gap_between_neighbours(self) -> None:
        """Pieces placed side by side are separated by the kerf."""
        settings = SheetSettings(kerf=10.0)
        piece = Piece(piece_id="panel", width=500.0, height=1000.0, quantity=2)
        result = _packer_for(settings).pack([piece])

        first, second = result.placements
        assert result.total_sheets == 1
        assert (first.x, first.y) == (0.0, 0.0)
        assert (second.x, second.y) == (510.0, 0.0)
        assert second.x - first.right_edge >= 10.0

    def test_exact_fit_uses_whole_sheet(self) -> None:
        """A piece matching the usable area fills one sheet."""
        piece = Piece(piece_id="full", width=2440.0, height=1220.0)
        result = _packer_for(SheetSettings()).pack([piece])
        assert result.total_sheets == 1
        assert result.overall_utilization_percentage == pytest.approx(100.0)
        assert result.layouts[0].free_rects == ()

    def test_trim_margin_offsets_placement(self) -> None:
        """Placements start at the trim margin."""
        settings = SheetSettings(trim_margin=10.0)
        piece = Piece(piece_id="p", width=100.0, height=100.0)
        placed = _packer_for(settings).pack([piece]).placements[0]
        assert (placed.x, placed.y) == (10.0, 10.0)

    def test_largest_area_placed_first(self, no_kerf_settings: SheetSettings) -> None:
        """Instances are placed in descending area order."""
        small = Piece(piece_id="small", width=100.0, height=100.0)
        large = Piece(piece_id="large", width=200.0, height=200.0)
        result = _packer_for(no_kerf_settings).pack([small, large])
        assert [p.piece_id for p in result.placements] == ["large", "small"]
        assert (result.placements[0].x, result.placements[0].y) == (0.0, 0.0)

    def test_equal_area_keeps_input_order(self, no_kerf_settings: SheetSettings) -> None:
        """Ties on area are broken by input order."""
        first = Piece(piece_id="first", width=100.0, height=200.0)
        second = Piece(piece_id="second", width=200.0, height=100.0)
        result = _packer_for(no_kerf_settings).pack([first, second])
        assert [p.piece_id for p in result.placements] == ["first", "second"]

    def test_first_open_sheet_with_room_is_used(self, no_kerf_settings: SheetSettings) -> None:
        """Smaller pieces backfill earlier sheets before later ones."""
        big = Piece(piece_id="big", width=2000.0, height=1220.0, quantity=2)
        filler = Piece(piece_id="filler", width=400.0, height=1000.0)
        result = _packer_for(no_kerf_settings).pack([big, filler])
        assert result.total_sheets == 2
        filler_placement = next(p for p in result.placements if p.piece_id == "filler")
        assert filler_placement.sheet_index == 0

    def test_deterministic(self, packer: GuillotineBinPacker) -> None:
        """Packing the same input twice gives equal results."""
        pieces = [
            Piece(piece_id="a", width=610.0, height=876.0, quantity=3),
            Piece(piece_id="b", width=400.0, height=300.0, quantity=4),
            Piece(piece_id="c", width=1200.0, height=600.0),
        ]
        assert packer.pack(pieces) == packer.pack(pieces)

    def test_metadata_passed_through(self, packer: GuillotineBinPacker) -> None:
        """Piece metadata is reachable from placements unchanged."""
        piece = Piece(
            piece_id="p",
            width=100.0,
            height=100.0,
            material="oak",
            metadata={"edge_band": "front"},
        )
        placed = packer.pack([piece]).placements[0]
        assert placed.metadata == {"edge_band": "front"}
        assert placed.material == "oak"

    def test_invariant_error_when_fresh_sheet_rejects_piece(
        self, packer: GuillotineBinPacker, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A feasible piece that cannot go on an empty sheet fails loudly."""
        monkeypatch.setattr(
            "sheetcut.infrastructure.bin_packing.packer.find_best_fit",
            lambda instance, regions: None,
        )
        with pytest.raises(PackingInvariantError):
            packer.pack([Piece(piece_id="p", width=10.0, height=10.0)])


class TestPackingBudget:
    """Tests for iteration budgets and partial results."""

    def test_max_placements_truncates(self, default_settings: SheetSettings) -> None:
        """Instances past the budget are unplaced and the result is truncated."""
        piece = Piece(piece_id="p", width=100.0, height=100.0, quantity=3, label="P")
        packer = _packer_for(default_settings, budget=PackingBudget(max_placements=1))
        result = packer.pack([piece])

        assert result.truncated is True
        assert result.total_pieces_placed == 1
        assert [u.reason for u in result.unplaced] == [
            UnplacedReason.BUDGET_EXHAUSTED,
            UnplacedReason.BUDGET_EXHAUSTED,
        ]
        assert result.unplaced_labels == [
            "P 2/3 (placement budget exhausted)",
            "P 3/3 (placement budget exhausted)",
        ]

    def test_zero_budget_places_nothing(self, default_settings: SheetSettings) -> None:
        """A zero budget opens no sheets."""
        piece = Piece(piece_id="p", width=100.0, height=100.0, quantity=2)
        packer = _packer_for(default_settings, budget=PackingBudget(max_placements=0))
        result = packer.pack([piece])
        assert result.total_sheets == 0
        assert len(result.unplaced) == 2

    def test_too_large_reported_before_skipped(
        self, default_settings: SheetSettings
    ) -> None:
        """Oversized pieces come first in the unplaced list."""
        pieces = [
            Piece(piece_id="small", width=100.0, height=100.0, quantity=2),
            Piece(piece_id="huge", width=5000.0, height=5000.0),
        ]
        packer = _packer_for(default_settings, budget=PackingBudget(max_placements=1))
        result = packer.pack(pieces)
        assert [u.piece_id for u in result.unplaced] == ["huge", "small"]
        assert result.unplaced[0].reason is UnplacedReason.TOO_LARGE

    def test_generous_budget_not_truncated(self, default_settings: SheetSettings) -> None:
        """A budget that is never reached leaves the result complete."""
        piece = Piece(piece_id="p", width=100.0, height=100.0, quantity=2)
        packer = _packer_for(
            default_settings, budget=PackingBudget(max_placements=10, time_limit=60.0)
        )
        result = packer.pack([piece])
        assert result.truncated is False
        assert result.total_pieces_placed == 2


# =============================================================================
# Aggregation Tests
# =============================================================================


class TestUtilization:
    """Tests for overall utilization calculation."""

    def test_no_layouts(self) -> None:
        """No sheets means zero utilization."""
        assert calculate_overall_utilization([]) == 0.0

    def test_area_weighted(self, no_kerf_settings: SheetSettings) -> None:
        """Overall utilization is total used over total sheet area."""
        half = Piece(piece_id="half", width=1220.0, height=1220.0)
        full = SheetLayout(
            0,
            no_kerf_settings,
            (
                PlacedPiece(PieceInstance(half, 0, 0), 0, 0, 1220, 1220, 0),
                PlacedPiece(PieceInstance(half, 0, 1), 1220, 0, 1220, 1220, 0),
            ),
        )
        empty = SheetLayout(1, no_kerf_settings, ())
        assert calculate_overall_utilization([full, empty]) == pytest.approx(50.0)


# =============================================================================
# BinPackingService Tests
# =============================================================================


class TestBinPackingService:
    """Tests for BinPackingService multi-material coordination."""

    def test_empty_input(self) -> None:
        """No pieces gives an empty plan."""
        plan = BinPackingService().optimize([])
        assert plan.results == {}
        assert plan.total_sheets == 0
        assert plan.overall_utilization_percentage == 0.0

    def test_groups_by_material_in_first_seen_order(self) -> None:
        """Each material gets its own sheets."""
        pieces = [
            Piece(piece_id="a", width=600.0, height=600.0, material="ply"),
            Piece(piece_id="b", width=600.0, height=600.0, material="mdf"),
            Piece(piece_id="c", width=600.0, height=600.0, material="ply"),
        ]
        plan = BinPackingService().optimize(pieces)
        assert list(plan.results) == ["ply", "mdf"]
        assert plan.sheets_by_material == {"ply": 1, "mdf": 1}
        assert plan.total_sheets == 2
        assert plan.total_pieces_placed == 3

    def test_grouping_disabled(self) -> None:
        """With grouping off all pieces share sheets."""
        pieces = [
            Piece(piece_id="a", width=600.0, height=600.0, material="ply"),
            Piece(piece_id="b", width=600.0, height=600.0, material="mdf"),
        ]
        plan = BinPackingService(BinPackingConfig(group_by_material=False)).optimize(pieces)
        assert list(plan.results) == [""]
        assert plan.total_sheets == 1

    def test_plan_collects_unplaced(self) -> None:
        """Unplaced labels from every group appear on the plan."""
        pieces = [
            Piece(piece_id="a", width=600.0, height=600.0, material="ply"),
            Piece(piece_id="b", width=9000.0, height=600.0, material="mdf", label="Beam"),
        ]
        plan = BinPackingService().optimize(pieces)
        assert plan.unplaced_labels == ["Beam (too large for sheet)"]
        assert plan.results["mdf"].total_sheets == 0
        assert plan.truncated is False

    def test_plan_utilization_weighted_by_sheet_area(self) -> None:
        """Plan utilization weighs each group by its sheet area."""
        settings = SheetSettings(width=1000.0, height=1000.0, kerf=0.0)
        pieces = [
            Piece(piece_id="a", width=1000.0, height=1000.0, material="ply"),
            Piece(piece_id="b", width=500.0, height=1000.0, material="mdf"),
        ]
        plan = BinPackingService(BinPackingConfig(sheet=settings)).optimize(pieces)
        assert isinstance(plan, CutPlan)
        assert plan.overall_utilization_percentage == pytest.approx(75.0)
