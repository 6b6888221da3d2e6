"""Tests for floor extraction, floor correlation and next-number generation."""

import pytest

from propunit_backend.modules.unit_numbering import services
from propunit_backend.modules.unit_numbering.models import PatternId
from propunit_backend.modules.unit_numbering.patterns import PATTERN_CATALOG


class TestExtractExpectedFloor:
    @pytest.mark.parametrize(
        "unit_number, floor",
        [
            ("A-1001", 1),
            ("B1U01", 1),
            ("B2U07", 2),
            ("A101", 1),
            ("C905", 9),
            ("A-0001", 0),
            ("Suite-105", 1),
            ("Suite-205", 2),
            ("Suite-1205", 12),
        ],
    )
    def test_floor_carrying_patterns(self, unit_number, floor):
        assert services.extract_expected_floor_from_unit_number(unit_number) == floor

    @pytest.mark.parametrize("unit_number", ["1001", "Unit-001", "", "Suite-5", "XYZ123ABC"])
    def test_no_floor_information(self, unit_number):
        assert services.extract_expected_floor_from_unit_number(unit_number) is None


class TestFloorCorrelation:
    def test_matching_floor_is_valid(self):
        result = services.validate_unit_number_floor_correlation("A-1001", 1)
        assert result.is_valid
        assert result.message == ""
        assert result.pattern == PatternId.ALPHA_NUMERIC

    def test_mismatch_names_the_implied_floor(self):
        result = services.validate_unit_number_floor_correlation("A-1001", 2)

        assert not result.is_valid
        assert "suggests Floor 1" in result.message
        assert result.message == (
            'Unit number "A-1001" suggests Floor 1 (alphabetic pattern), '
            "but Floor 2 is selected."
        )
        assert result.suggested_floor == 1

    def test_building_unit_mismatch(self):
        result = services.validate_unit_number_floor_correlation("B2U01", 1)
        assert not result.is_valid
        assert result.suggested_floor == 2
        assert "building-unit format" in result.message

    def test_numbers_without_floor_are_always_valid(self):
        assert services.validate_unit_number_floor_correlation("25", 3).is_valid
        assert services.validate_unit_number_floor_correlation("Unit-001", 7).is_valid

    def test_undeclared_floor_is_valid(self):
        assert services.validate_unit_number_floor_correlation("A-1001", None).is_valid


class TestGenerateNextUnitNumber:
    @pytest.mark.parametrize("pattern", list(PatternId))
    def test_empty_snapshot_gives_default_first(self, pattern):
        result = services.generate_next_unit_number([], pattern)
        assert result.next_number == PATTERN_CATALOG[pattern].default_first()

    def test_starting_recommendation(self):
        result = services.generate_next_unit_number([], PatternId.SEQUENTIAL)
        assert result.next_number == "1"
        assert result.is_consistent
        assert "Starting new sequential pattern" in result.recommendation

    def test_sequential_continues_from_max(self, sequential_units):
        result = services.generate_next_unit_number(sequential_units, PatternId.SEQUENTIAL)
        assert result.next_number == "3"
        assert result.pattern == PatternId.SEQUENTIAL
        assert result.recommendation == "Following sequential pattern"

    def test_sequential_ignores_other_patterns_and_floor(self, make_units):
        units = make_units("1", "5", "A101", "Unit-009", floor=1)
        assert services.generate_next_unit_number(units, "sequential", floor=4).next_number == "6"

    def test_sequential_drops_zero_padding(self, make_units):
        units = make_units("001", "002")
        assert services.generate_next_unit_number(units, PatternId.SEQUENTIAL).next_number == "3"

    def test_suggested_number_for_first_unit(self):
        result = services.generate_next_unit_number(
            [], PatternId.SEQUENTIAL, suggested_number="A101"
        )
        assert result.next_number == "A101"
        assert result.pattern == PatternId.WING_UNIT
        assert "Using suggested number" in result.recommendation

    def test_suggested_number_ignored_once_units_exist(self, sequential_units):
        result = services.generate_next_unit_number(
            sequential_units, PatternId.SEQUENTIAL, suggested_number="101"
        )
        assert result.next_number == "3"

    def test_alpha_numeric_scoped_to_floor(self, alpha_units):
        result = services.generate_next_unit_number(alpha_units, PatternId.ALPHA_NUMERIC, floor=1)
        assert result.next_number == "A-1003"
        assert result.recommendation == "Following alphabetic pattern for floor 1"

    def test_alpha_numeric_unscoped_continues_highest(self, alpha_units):
        result = services.generate_next_unit_number(alpha_units, PatternId.ALPHA_NUMERIC)
        assert result.next_number == "B-2002"

    def test_alpha_numeric_new_floor(self, alpha_units):
        # Letter of the highest existing unit is kept unless one is given
        assert (
            services.generate_next_unit_number(alpha_units, "alpha_numeric", floor=3).next_number
            == "B-3001"
        )
        assert (
            services.generate_next_unit_number(
                alpha_units, "alpha_numeric", floor=3, prefix="A"
            ).next_number
            == "A-3001"
        )

    def test_wing_unit(self, wing_units):
        assert services.generate_next_unit_number(wing_units, "wing_unit", floor=1).next_number == "A103"
        assert services.generate_next_unit_number(wing_units, "wing_unit", floor=2).next_number == "A202"
        assert services.generate_next_unit_number(wing_units, "wing_unit", floor=3).next_number == "A301"

    def test_wing_unit_prefix_scopes_to_wing(self, make_units):
        units = make_units("A101", "A102", "B101", floor=1)
        result = services.generate_next_unit_number(units, "wing_unit", floor=1, prefix="B")
        assert result.next_number == "B102"

    def test_wing_unit_sequence_carries_into_next_floor(self, make_units):
        assert services.generate_next_unit_number(make_units("A199"), "wing_unit").next_number == "A200"

    def test_building_unit(self, make_units):
        units = make_units("B1U01", "B1U02", floor=1)
        assert services.generate_next_unit_number(units, "building_unit").next_number == "B1U03"
        assert services.generate_next_unit_number(units, "building_unit", floor=2).next_number == "B2U01"

    def test_suite(self, make_units):
        units = make_units("Suite-101", "Suite-102", floor=1)
        assert services.generate_next_unit_number(units, "suite").next_number == "Suite-103"
        assert services.generate_next_unit_number(units, "suite", floor=2).next_number == "Suite-201"

    def test_suite_keeps_existing_case_and_width(self, make_units):
        assert services.generate_next_unit_number(make_units("suite-105"), "suite").next_number == "suite-106"
        assert services.generate_next_unit_number(make_units("Suite-0099"), "suite").next_number == "Suite-0100"

    def test_custom_with_prefix(self, make_units):
        units = make_units("Unit-001", "Unit-002", floor=1)
        result = services.generate_next_unit_number(units, PatternId.CUSTOM, 1, "Unit")
        assert result.next_number == "Unit-003"

    def test_custom_infers_prefix(self, make_units):
        units = make_units("Apt-001", "Apt-004")
        assert services.generate_next_unit_number(units, "custom").next_number == "Apt-005"

    def test_custom_new_prefix_starts_over(self, make_units):
        units = make_units("Unit-001", "Unit-002")
        assert services.generate_next_unit_number(units, "custom", prefix="Apt").next_number == "Apt-001"

    def test_custom_keeps_wider_suffix(self, make_units):
        assert services.generate_next_unit_number(make_units("Apt-0099"), "custom").next_number == "Apt-0100"

    def test_custom_unparseable_falls_back_to_prefix_counter(self, make_units):
        units = make_units("XYZ123ABC", "Unit_123")
        assert services.generate_next_unit_number(units, "custom").next_number == "Unit-001"
        assert services.generate_next_unit_number(units, "custom", prefix="Lot").next_number == "Lot-001"

    def test_unrepresentable_floor_falls_back_to_first_floor(self):
        result = services.generate_next_unit_number([], PatternId.WING_UNIT, floor=12)
        assert result.next_number == "A101"

    def test_does_not_mutate_snapshot(self, wing_units):
        snapshot = list(wing_units)
        services.generate_next_unit_number(wing_units, "wing_unit", floor=1)
        assert wing_units == snapshot

    def test_is_idempotent(self, alpha_units):
        first = services.generate_next_unit_number(alpha_units, "alpha_numeric", floor=1)
        second = services.generate_next_unit_number(alpha_units, "alpha_numeric", floor=1)
        assert first == second


class TestSuggestUnitNumberForFloor:
    def test_continues_floor_sequence(self, wing_units):
        result = services.suggest_unit_number_for_floor(1, wing_units, PatternId.WING_UNIT)
        assert result.next_number == "A103"

    def test_new_floor_gets_first_number(self, wing_units):
        result = services.suggest_unit_number_for_floor(3, wing_units, PatternId.WING_UNIT)
        assert result.next_number == "A301"

    def test_new_floor_without_any_units(self):
        result = services.suggest_unit_number_for_floor(9, [], PatternId.BUILDING_UNIT)
        assert result.next_number == "B9U01"

    def test_patterns_without_floors_stay_property_wide(self, sequential_units):
        result = services.suggest_unit_number_for_floor(2, sequential_units, PatternId.SEQUENTIAL)
        assert result.next_number == "3"

    def test_full_floor_reuses_free_number_on_that_floor(self, make_units):
        result = services.suggest_unit_number_for_floor(
            1, make_units("A199", "A200"), PatternId.WING_UNIT
        )
        assert result.next_number == "A101"
        assert result.recommendation == "Following wing-unit format for floor 1"

    def test_completely_full_floor_continues_after_highest(self, make_units):
        units = make_units(*[f"A1{n:02d}" for n in range(1, 100)], "A200")
        result = services.suggest_unit_number_for_floor(1, units, PatternId.WING_UNIT)

        assert result.next_number == "A201"
        assert result.next_number not in {u.unit_number for u in units}
        assert result.recommendation == "Following wing-unit format"

    def test_unencodable_floor_continues_existing_sequence(self, make_units):
        result = services.suggest_unit_number_for_floor(
            15, make_units("A101"), PatternId.WING_UNIT
        )
        assert result.next_number == "A102"
