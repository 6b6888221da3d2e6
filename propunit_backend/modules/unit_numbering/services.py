"""Unit numbering business logic.

Pure functions over a snapshot of sibling units: callers read the snapshot
inside the transaction that will persist the result.
"""

from collections.abc import Sequence

from ...core.logging import get_logger
from .models import (
    BatchRejection,
    BatchValidationResult,
    ConflictResult,
    ConsistencyResult,
    CustomUnitNumber,
    NumberSuggestion,
    PatternId,
    UnitRecord,
    ValidationResult,
)
from .patterns import (
    PATTERN_CATALOG,
    PatternDefinition,
    detect_pattern,
    extract_prefix,
    get_pattern,
)
from .patterns import parse_custom_unit as _parse_custom_unit

logger = get_logger("unit_numbering")


def _without_unit(
    units: Sequence[UnitRecord], exclude_unit_id: str | None
) -> list[UnitRecord]:
    if exclude_unit_id is None:
        return list(units)
    return [unit for unit in units if unit.id != exclude_unit_id]


def detect_numbering_pattern(unit_number: str | None) -> PatternId:
    """Classify a unit number into exactly one pattern."""
    pattern = detect_pattern(unit_number)
    logger.debug(f"Unit number {unit_number!r} classified as {pattern.value}")
    return pattern


def extract_expected_floor_from_unit_number(unit_number: str | None) -> int | None:
    """Return the floor implied by a unit number, or None if its pattern has none."""
    if not unit_number:
        return None
    definition = PATTERN_CATALOG[detect_pattern(unit_number)]
    return definition.extract_floor(unit_number)


def validate_unit_number_floor_correlation(
    unit_number: str, floor: int | None
) -> ValidationResult:
    """Check a declared floor against the floor implied by the unit number.

    Args:
        unit_number: Unit number to check
        floor: Declared floor (None skips the check)

    Returns:
        ValidationResult; when invalid, `suggested_floor` holds the implied floor
    """
    pattern = detect_pattern(unit_number)
    expected_floor = extract_expected_floor_from_unit_number(unit_number)

    if floor is None or expected_floor is None or expected_floor == floor:
        return ValidationResult(is_valid=True, message="", pattern=pattern)

    message = (
        f'Unit number "{unit_number}" suggests Floor {expected_floor} '
        f"({PATTERN_CATALOG[pattern].label}), but Floor {floor} is selected."
    )
    return ValidationResult(
        is_valid=False,
        message=message,
        pattern=pattern,
        suggested_floor=expected_floor,
    )


def generate_next_unit_number(
    existing_units: Sequence[UnitRecord],
    pattern: PatternId | str,
    floor: int | None = None,
    prefix: str | None = None,
    suggested_number: str | None = None,
) -> NumberSuggestion:
    """Generate the next unit number for a pattern.

    Only existing numbers that classify as `pattern` take part. For patterns
    that encode a floor, a given `floor` narrows them to that floor; for
    the others the floor is ignored.

    Args:
        existing_units: Sibling units of the same property
        pattern: Target pattern
        floor: Optional floor to scope the sequence to
        prefix: Custom prefix, or wing/building letter for letter-led patterns
        suggested_number: Returned unchanged when there are no existing units

    Returns:
        NumberSuggestion with the generated number
    """
    pattern = PatternId(pattern)

    if not existing_units and suggested_number:
        detected = detect_pattern(suggested_number)
        return NumberSuggestion(
            next_number=suggested_number,
            pattern=detected,
            recommendation=f"Using suggested number with {detected.value} pattern",
        )

    if pattern is PatternId.NUMERIC:
        pattern = PatternId.SEQUENTIAL

    definition = PATTERN_CATALOG[pattern]
    scope_floor = floor if definition.carries_floor else None
    conforming = [
        unit.unit_number
        for unit in existing_units
        if detect_pattern(unit.unit_number) is pattern
    ]

    if not conforming:
        next_number = definition.default_first(scope_floor, prefix)
        recommendation = f"Starting new {pattern.value} pattern"
    else:
        next_number = definition.next_value(conforming, scope_floor, prefix)
        recommendation = f"Following {definition.label}"
        # A full or unencodable floor moves the number off that floor
        if scope_floor is not None and definition.extract_floor(next_number) == scope_floor:
            recommendation += f" for floor {scope_floor}"

    logger.debug(
        f"Generated {next_number} for {pattern.value} "
        f"from {len(conforming)} conforming unit(s)"
    )
    return NumberSuggestion(
        next_number=next_number,
        pattern=pattern,
        recommendation=recommendation,
    )


def suggest_unit_number_for_floor(
    floor: int,
    existing_units: Sequence[UnitRecord],
    pattern: PatternId | str,
) -> NumberSuggestion:
    """Next unit number on a given floor, or the floor's first number if it is empty."""
    return generate_next_unit_number(existing_units, pattern, floor=floor)


def detect_conflicts(
    unit_number: str,
    existing_units: Sequence[UnitRecord],
    exclude_unit_id: str | None = None,
) -> ConflictResult:
    """Check a candidate number for an exact collision with a sibling unit.

    On conflict the suggestion continues the candidate's own sequence: same
    floor for floor-encoding patterns, same letter, suite label or custom
    prefix where the number has one.
    """
    siblings = _without_unit(existing_units, exclude_unit_id)
    conflict = next(
        (unit for unit in siblings if unit.unit_number == unit_number), None
    )
    if conflict is None:
        return ConflictResult(has_conflict=False)

    suggestion = generate_next_unit_number(
        siblings,
        detect_pattern(unit_number),
        floor=extract_expected_floor_from_unit_number(unit_number),
        prefix=extract_prefix(unit_number),
    ).next_number

    return ConflictResult(
        has_conflict=True,
        conflicting_unit=conflict.unit_number,
        suggestion=suggestion,
    )


def validate_pattern_consistency(units: Sequence[UnitRecord]) -> ConsistencyResult:
    """Report whether all units share a single numbering pattern."""
    if not units:
        return ConsistencyResult(
            is_consistent=True,
            detected_patterns=[],
            recommendation="No units to validate",
        )

    patterns = list(dict.fromkeys(detect_pattern(unit.unit_number) for unit in units))

    if len(patterns) == 1:
        return ConsistencyResult(
            is_consistent=True,
            detected_patterns=patterns,
            recommendation=f"All units follow {patterns[0].value} pattern",
        )

    names = ", ".join(pattern.value for pattern in patterns)
    logger.info(f"Mixed unit numbering patterns across {len(units)} unit(s): {names}")
    return ConsistencyResult(
        is_consistent=False,
        detected_patterns=patterns,
        recommendation=(
            f"Mixed patterns detected: {names}. "
            "Consider standardizing to one pattern."
        ),
    )


def parse_custom_unit(unit_number: str) -> CustomUnitNumber | None:
    """Parse `<Prefix>-<digits>`; None when either part is missing."""
    return _parse_custom_unit(unit_number)


def validate_unit_number_update(
    unit_number: str,
    floor: int | None,
    existing_units: Sequence[UnitRecord],
    exclude_unit_id: str | None = None,
) -> ValidationResult:
    """Approve or reject a unit number before a create/update is persisted.

    Conflicts are checked first, then floor correlation.

    Args:
        unit_number: Proposed unit number
        floor: Declared floor of the unit
        existing_units: All sibling units of the same property
        exclude_unit_id: ID of the unit being updated, left out of the conflict check

    Returns:
        ValidationResult with `conflict` set
    """
    pattern = detect_pattern(unit_number)

    conflict_check = detect_conflicts(unit_number, existing_units, exclude_unit_id)
    if conflict_check.has_conflict:
        logger.info(f"Rejected unit number {unit_number!r}: already exists")
        return ValidationResult(
            is_valid=False,
            conflict=True,
            message=f'Unit number "{unit_number}" already exists',
            pattern=pattern,
            suggestion=conflict_check.suggestion,
        )

    floor_check = validate_unit_number_floor_correlation(unit_number, floor)
    if not floor_check.is_valid:
        siblings = _without_unit(existing_units, exclude_unit_id)
        suggestion = suggest_unit_number_for_floor(floor, siblings, pattern)
        logger.info(
            f"Rejected unit number {unit_number!r}: "
            f"implies floor {floor_check.suggested_floor}, declared {floor}"
        )
        return ValidationResult(
            is_valid=False,
            conflict=False,
            message=floor_check.message,
            pattern=pattern,
            suggestion=suggestion.next_number,
            suggested_floor=floor_check.suggested_floor,
        )

    return ValidationResult(
        is_valid=True,
        conflict=False,
        message="Unit number is valid",
        pattern=pattern,
    )


def validate_unit_batch(
    new_units: Sequence[UnitRecord],
    existing_units: Sequence[UnitRecord],
) -> BatchValidationResult:
    """Validate units created together in bulk.

    Each unit is checked against the existing units plus the ones accepted
    before it, so a number repeated within the batch is a conflict.
    """
    consistency = validate_pattern_consistency(new_units)
    snapshot = list(existing_units)
    accepted: list[UnitRecord] = []
    rejected: list[BatchRejection] = []

    for index, unit in enumerate(new_units):
        result = validate_unit_number_update(unit.unit_number, unit.floor, snapshot)
        if not result.is_valid:
            rejected.append(
                BatchRejection(
                    index=index,
                    unit_number=unit.unit_number,
                    message=result.message,
                    suggestion=result.suggestion,
                )
            )
            continue
        accepted.append(unit)
        snapshot.append(unit)

    if rejected:
        logger.info(f"Batch validation rejected {len(rejected)} of {len(new_units)} unit(s)")

    return BatchValidationResult(
        consistency=consistency,
        accepted=accepted,
        rejected=rejected,
    )


def get_pattern_info(pattern_id: PatternId | str) -> PatternDefinition | None:
    """Look up a pattern definition; None for unknown ids."""
    return get_pattern(pattern_id)


def list_patterns() -> list[PatternDefinition]:
    return list(PATTERN_CATALOG.values())
