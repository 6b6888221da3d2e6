"""Tests for pattern classification and the pattern catalog."""

import pytest

from propunit_backend.core.exceptions import PatternRegistrationError
from propunit_backend.modules.unit_numbering import services
from propunit_backend.modules.unit_numbering.models import CustomUnitNumber, PatternId
from propunit_backend.modules.unit_numbering.patterns import (
    PATTERN_CATALOG,
    PATTERN_PRECEDENCE,
    PatternDefinition,
)


class TestDetectNumberingPattern:
    @pytest.mark.parametrize(
        "unit_number, expected",
        [
            ("1", PatternId.SEQUENTIAL),
            ("25", PatternId.SEQUENTIAL),
            ("101", PatternId.SEQUENTIAL),
            ("1001", PatternId.SEQUENTIAL),
            ("A-1001", PatternId.ALPHA_NUMERIC),
            ("B-2005", PatternId.ALPHA_NUMERIC),
            ("B1U01", PatternId.BUILDING_UNIT),
            ("C3U12", PatternId.BUILDING_UNIT),
            ("A101", PatternId.WING_UNIT),
            ("C205", PatternId.WING_UNIT),
            ("Suite-101", PatternId.SUITE),
            ("suite-205", PatternId.SUITE),
            ("SUITE-7", PatternId.SUITE),
            ("Unit-001", PatternId.CUSTOM),
            ("Apt-123", PatternId.CUSTOM),
            ("XYZ123ABC", PatternId.CUSTOM),
            ("Unit_123", PatternId.CUSTOM),
            ("", PatternId.NUMERIC),
        ],
    )
    def test_classifies_known_shapes(self, unit_number, expected):
        assert services.detect_numbering_pattern(unit_number) == expected

    def test_none_is_numeric(self):
        assert services.detect_numbering_pattern(None) == PatternId.NUMERIC

    @pytest.mark.parametrize(
        "unit_number",
        ["B-205", "A-10011", "B10U05", "a101", "A1011", "Suite-", "Suite-12A"],
    )
    def test_near_misses_fall_back_to_custom(self, unit_number):
        assert services.detect_numbering_pattern(unit_number) == PatternId.CUSTOM

    def test_structured_patterns_win_over_fallbacks(self):
        # The custom recognizer accepts anything non-empty
        assert PATTERN_CATALOG[PatternId.CUSTOM].recognize("A101")
        assert services.detect_numbering_pattern("A101") == PatternId.WING_UNIT
        assert PATTERN_CATALOG[PatternId.SEQUENTIAL].recognize("101")
        assert services.detect_numbering_pattern("101") == PatternId.SEQUENTIAL

    def test_precedence_order(self):
        assert PATTERN_PRECEDENCE == (
            PatternId.SUITE,
            PatternId.BUILDING_UNIT,
            PatternId.ALPHA_NUMERIC,
            PatternId.WING_UNIT,
            PatternId.SEQUENTIAL,
            PatternId.CUSTOM,
        )

    def test_is_idempotent(self):
        first = [services.detect_numbering_pattern(n) for n in ("A101", "7", "")]
        second = [services.detect_numbering_pattern(n) for n in ("A101", "7", "")]
        assert first == second


class TestPatternCatalog:
    def test_every_pattern_is_registered(self):
        assert set(PATTERN_CATALOG) == set(PatternId)

    @pytest.mark.parametrize(
        "pattern_id, default_first",
        [
            (PatternId.SUITE, "Suite-101"),
            (PatternId.BUILDING_UNIT, "B1U01"),
            (PatternId.ALPHA_NUMERIC, "A-1001"),
            (PatternId.WING_UNIT, "A101"),
            (PatternId.SEQUENTIAL, "1"),
            (PatternId.CUSTOM, "Unit-001"),
            (PatternId.NUMERIC, "1"),
        ],
    )
    def test_default_first_values(self, pattern_id, default_first):
        assert PATTERN_CATALOG[pattern_id].default_first() == default_first

    def test_default_first_recognized_by_own_pattern(self):
        for pattern_id in PATTERN_PRECEDENCE:
            value = PATTERN_CATALOG[pattern_id].default_first()
            assert services.detect_numbering_pattern(value) == pattern_id

    def test_floor_carrying_patterns(self):
        carrying = {p for p, d in PATTERN_CATALOG.items() if d.carries_floor}
        assert carrying == {
            PatternId.SUITE,
            PatternId.BUILDING_UNIT,
            PatternId.ALPHA_NUMERIC,
            PatternId.WING_UNIT,
        }

    def test_default_first_for_floor(self):
        assert PATTERN_CATALOG[PatternId.WING_UNIT].default_first(3) == "A301"
        assert PATTERN_CATALOG[PatternId.ALPHA_NUMERIC].default_first(4) == "A-4001"
        assert PATTERN_CATALOG[PatternId.BUILDING_UNIT].default_first(9) == "B9U01"
        assert PATTERN_CATALOG[PatternId.SUITE].default_first(12) == "Suite-1201"

    def test_default_first_with_prefix(self):
        assert PATTERN_CATALOG[PatternId.WING_UNIT].default_first(2, "C") == "C201"
        assert PATTERN_CATALOG[PatternId.CUSTOM].default_first(prefix="Apt") == "Apt-001"
        # A prefix that cannot fit the pattern is ignored
        assert PATTERN_CATALOG[PatternId.WING_UNIT].default_first(2, "Tower") == "A201"

    def test_missing_operations_fail_registration(self):
        with pytest.raises(PatternRegistrationError) as excinfo:
            PatternDefinition(
                id=PatternId.CUSTOM,
                name="Broken",
                label="broken pattern",
                description="",
                example="",
                template="",
                recognize=lambda raw: True,
                next_value="not callable",
            )

        assert excinfo.value.missing == ["extract_floor", "next_value", "default_first"]
        assert "custom" in excinfo.value.message


class TestGetPatternInfo:
    def test_lookup_by_enum_and_string(self):
        assert services.get_pattern_info(PatternId.SUITE).id == PatternId.SUITE
        assert services.get_pattern_info("wing_unit").id == PatternId.WING_UNIT

    @pytest.mark.parametrize("pattern_id", ["floor_based", "", "SUITE"])
    def test_unknown_ids_return_none(self, pattern_id):
        assert services.get_pattern_info(pattern_id) is None


class TestParseCustomUnit:
    def test_prefix_and_number(self):
        assert services.parse_custom_unit("Unit-123") == CustomUnitNumber("Unit", 123)
        assert services.parse_custom_unit("Apt-007") == CustomUnitNumber("Apt", 7)

    @pytest.mark.parametrize("unit_number", ["123", "Unit-", "-12", "Unit_123", "A-B-1", ""])
    def test_rejects_incomplete_forms(self, unit_number):
        assert services.parse_custom_unit(unit_number) is None
