"""Unit numbering value types for PropUnit.

Everything here is immutable and created fresh per call; the numbering
engine keeps no state between calls.
"""

import enum
from dataclasses import dataclass, field


class PatternId(str, enum.Enum):
    """Unit-number naming conventions recognized by the engine."""

    SEQUENTIAL = "sequential"
    ALPHA_NUMERIC = "alpha_numeric"
    BUILDING_UNIT = "building_unit"
    WING_UNIT = "wing_unit"
    SUITE = "suite"
    CUSTOM = "custom"
    NUMERIC = "numeric"


@dataclass(frozen=True)
class UnitRecord:
    """A sibling unit as seen by the engine.

    `id` is only used to leave the unit being edited out of conflict checks.
    """

    unit_number: str
    unit_type: str = ""
    floor: int | None = None
    id: str | None = None


@dataclass(frozen=True)
class CustomUnitNumber:
    """A parsed `<Prefix>-<digits>` unit number."""

    prefix: str
    number: int


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a floor-correlation or update validation."""

    is_valid: bool
    message: str
    pattern: PatternId
    suggestion: str | None = None
    suggested_floor: int | None = None
    conflict: bool | None = None


@dataclass(frozen=True)
class ConflictResult:
    has_conflict: bool
    conflicting_unit: str | None = None
    suggestion: str | None = None


@dataclass(frozen=True)
class ConsistencyResult:
    is_consistent: bool
    detected_patterns: list[PatternId]
    recommendation: str


@dataclass(frozen=True)
class NumberSuggestion:
    """A generated unit number plus how it was derived."""

    next_number: str
    pattern: PatternId
    recommendation: str
    is_consistent: bool = True


@dataclass(frozen=True)
class BatchRejection:
    index: int
    unit_number: str
    message: str
    suggestion: str | None = None


@dataclass(frozen=True)
class BatchValidationResult:
    """Outcome of validating a batch of new units against their siblings."""

    consistency: ConsistencyResult
    accepted: list[UnitRecord] = field(default_factory=list)
    rejected: list[BatchRejection] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.rejected
