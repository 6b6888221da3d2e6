"""Unit number pattern catalog.

Each naming convention is a PatternDefinition bundling four operations:
recognize, extract_floor, next_value and default_first. Classification walks
PATTERN_PRECEDENCE and the first recognizer that accepts the string wins.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ...core.exceptions import PatternRegistrationError
from ...core.utils import generate_code
from .models import CustomUnitNumber, PatternId

REQUIRED_OPERATIONS = ("recognize", "extract_floor", "next_value", "default_first")

DEFAULT_CUSTOM_PREFIX = "Unit"
CUSTOM_SUFFIX_WIDTH = 3

_DIGITS_RE = re.compile(r"[0-9]+")
_CUSTOM_UNIT_RE = re.compile(r"(?P<prefix>[^0-9-]+)-(?P<number>[0-9]+)")


@dataclass(frozen=True)
class PatternDefinition:
    """A numbering convention and the operations the engine dispatches to."""

    id: PatternId
    name: str
    label: str
    description: str
    example: str
    template: str
    property_types: tuple[str, ...] = ()
    carries_floor: bool = False
    recognize: Callable[[str], bool] | None = None
    extract_floor: Callable[[str], int | None] | None = None
    next_value: Callable[..., str] | None = None
    default_first: Callable[..., str] | None = None

    def __post_init__(self):
        missing = [op for op in REQUIRED_OPERATIONS if not callable(getattr(self, op))]
        if missing:
            pattern_id = self.id.value if isinstance(self.id, PatternId) else str(self.id)
            raise PatternRegistrationError(pattern_id, missing)


# ----- Floor-encoding patterns -----


@dataclass(frozen=True)
class _ParsedBlock:
    label: str
    block: int
    width: int


class _FlooredBlockPattern:
    """Shared behaviour of patterns whose digits encode a floor then a sequence.

    The digits are handled as one integer block: the trailing
    `sequence_digits` count units on a floor and the leading digits are the
    floor itself (105 -> floor 1, unit 05). Incrementing the block carries
    into the floor digits once a floor's sequence is exhausted.
    """

    def __init__(
        self,
        regex: str,
        render: str,
        label_regex: str,
        default_label: str,
        sequence_digits: int = 2,
        width: int | None = None,
        default_width: int = 3,
        flags: int = 0,
    ):
        self._regex = re.compile(regex, flags)
        self._label_regex = re.compile(label_regex, flags)
        self._render = render
        self._default_label = default_label
        self._sequence_digits = sequence_digits
        self._base = 10**sequence_digits
        self._width = width
        self._default_width = default_width

    def parse(self, raw: str) -> _ParsedBlock | None:
        match = self._regex.fullmatch(raw) if raw else None
        if match is None:
            return None
        digits = match.group("floor") + match.group("sequence")
        return _ParsedBlock(match.group("label"), int(digits), len(digits))

    def floor_of(self, parsed: _ParsedBlock) -> int | None:
        # A variable-width block shorter than a full floor range carries no floor
        if self._width is None and parsed.block < self._base:
            return None
        return parsed.block // self._base

    def supports_floor(self, floor: int) -> bool:
        if floor < 0:
            return False
        if self._width is None:
            return floor >= 1
        return floor < 10 ** (self._width - self._sequence_digits)

    def accepts_label(self, label: str | None) -> bool:
        return bool(label) and self._label_regex.fullmatch(label) is not None

    def render(self, label: str, block: int, width: int) -> str:
        digits = str(block).zfill(width)
        return self._render.format(
            label=label,
            floor=digits[: -self._sequence_digits],
            sequence=digits[-self._sequence_digits :],
        )

    def recognize(self, raw: str) -> bool:
        return self.parse(raw) is not None

    def extract_floor(self, raw: str) -> int | None:
        parsed = self.parse(raw)
        return self.floor_of(parsed) if parsed else None

    def default_first(self, floor: int | None = None, prefix: str | None = None) -> str:
        if floor is None or not self.supports_floor(floor):
            floor = 1
        label = prefix if self.accepts_label(prefix) else self._default_label
        block = floor * self._base + 1
        width = self._width or max(self._default_width, len(str(block)))
        return self.render(label, block, width)

    def label_of(self, raw: str) -> str | None:
        parsed = self.parse(raw)
        return parsed.label if parsed else None

    def next_value(
        self,
        existing: Sequence[str],
        floor: int | None = None,
        prefix: str | None = None,
    ) -> str:
        """Next free number, kept on `floor` while that floor has room.

        A floor the pattern cannot encode is ignored. Once a floor's range is
        used up the number continues after the highest one with the same label.
        """
        parsed = [p for p in (self.parse(raw) for raw in existing) if p is not None]

        if self.accepts_label(prefix):
            parsed = [p for p in parsed if p.label.casefold() == prefix.casefold()]
        elif parsed:
            # Keep the wing/building letter already in use
            prefix = max(parsed, key=lambda p: p.block).label

        if floor is not None and not self.supports_floor(floor):
            floor = None

        on_floor = parsed
        if floor is not None:
            on_floor = [p for p in parsed if self.floor_of(p) == floor]

        if not on_floor:
            return self.default_first(floor, prefix)

        top = max(on_floor, key=lambda p: p.block)
        label = top.label.casefold()
        taken = {p.block for p in parsed if p.label.casefold() == label}

        if floor is not None:
            first, last = floor * self._base + 1, floor * self._base + self._base - 1
            if top.block < last:
                return self.render(top.label, top.block + 1, top.width)
            for block in range(first, last + 1):
                if block not in taken:
                    return self.render(top.label, block, top.width)

        return self.render(top.label, max(taken) + 1, top.width)


_suite = _FlooredBlockPattern(
    regex=r"(?P<label>suite)-(?P<floor>[0-9]*?)(?P<sequence>[0-9]{1,2})",
    render="{label}-{floor}{sequence}",
    label_regex=r"suite",
    default_label="Suite",
    flags=re.IGNORECASE,
)

_building_unit = _FlooredBlockPattern(
    regex=r"(?P<label>[A-Z])(?P<floor>[0-9])U(?P<sequence>[0-9]{2})",
    render="{label}{floor}U{sequence}",
    label_regex=r"[A-Z]",
    default_label="B",
    width=3,
)

_alpha_numeric = _FlooredBlockPattern(
    regex=r"(?P<label>[A-Z])-(?P<floor>[0-9])(?P<sequence>[0-9]{3})",
    render="{label}-{floor}{sequence}",
    label_regex=r"[A-Z]",
    default_label="A",
    sequence_digits=3,
    width=4,
)

_wing_unit = _FlooredBlockPattern(
    regex=r"(?P<label>[A-Z])(?P<floor>[0-9])(?P<sequence>[0-9]{2})",
    render="{label}{floor}{sequence}",
    label_regex=r"[A-Z]",
    default_label="A",
    width=3,
)


# ----- Patterns without floor information -----


def _no_floor(raw: str) -> int | None:
    return None


def _sequential_recognize(raw: str) -> bool:
    return bool(raw) and _DIGITS_RE.fullmatch(raw) is not None


def _sequential_default(floor: int | None = None, prefix: str | None = None) -> str:
    return "1"


def _sequential_next(
    existing: Sequence[str],
    floor: int | None = None,
    prefix: str | None = None,
) -> str:
    values = [int(raw) for raw in existing if _sequential_recognize(raw)]
    if not values:
        return _sequential_default()
    return str(max(values) + 1)


def parse_custom_unit(raw: str) -> CustomUnitNumber | None:
    """Split `<Prefix>-<digits>` into its prefix and number.

    Returns None unless both a non-digit prefix and a numeric suffix exist.
    """
    match = _CUSTOM_UNIT_RE.fullmatch(raw) if raw else None
    if match is None:
        return None
    return CustomUnitNumber(prefix=match.group("prefix"), number=int(match.group("number")))


def _custom_recognize(raw: str) -> bool:
    # Catch-all: anything no structured recognizer claimed
    return bool(raw)


def _custom_default(floor: int | None = None, prefix: str | None = None) -> str:
    return generate_code(prefix or DEFAULT_CUSTOM_PREFIX, 1, CUSTOM_SUFFIX_WIDTH)


def _custom_next(
    existing: Sequence[str],
    floor: int | None = None,
    prefix: str | None = None,
) -> str:
    matches = [m for m in (_CUSTOM_UNIT_RE.fullmatch(raw) for raw in existing if raw) if m]
    if prefix is None and matches:
        prefix = matches[0].group("prefix")

    same_prefix = [m for m in matches if m.group("prefix") == prefix]
    if not same_prefix:
        return _custom_default(prefix=prefix)

    last = max(int(m.group("number")) for m in same_prefix)
    width = max(CUSTOM_SUFFIX_WIDTH, *(len(m.group("number")) for m in same_prefix))
    return generate_code(prefix, last + 1, width)


def _numeric_recognize(raw: str) -> bool:
    return not raw


# ----- Catalog -----


PATTERN_CATALOG: dict[PatternId, PatternDefinition] = {
    definition.id: definition
    for definition in (
        PatternDefinition(
            id=PatternId.SUITE,
            name="Suite Format",
            label="suite format",
            description="Suite prefix followed by floor and unit digits",
            example="Suite-101, Suite-102, Suite-201",
            template="Suite-{floor}{unit}",
            property_types=("commercial", "office"),
            carries_floor=True,
            recognize=_suite.recognize,
            extract_floor=_suite.extract_floor,
            next_value=_suite.next_value,
            default_first=_suite.default_first,
        ),
        PatternDefinition(
            id=PatternId.BUILDING_UNIT,
            name="Building-Unit Format",
            label="building-unit format",
            description="Building letter and floor digit followed by a unit identifier",
            example="B1U01, B1U02, B2U01",
            template="{building}{floor}U{unit}",
            property_types=("apartment", "commercial", "mixed_use"),
            carries_floor=True,
            recognize=_building_unit.recognize,
            extract_floor=_building_unit.extract_floor,
            next_value=_building_unit.next_value,
            default_first=_building_unit.default_first,
        ),
        PatternDefinition(
            id=PatternId.ALPHA_NUMERIC,
            name="Letter-Number Format",
            label="alphabetic pattern",
            description="Letter prefix followed by floor digit and 3-digit unit number",
            example="A-1001, A-1002, A-2001",
            template="{letter}-{floor}{unit}",
            property_types=("commercial", "industrial"),
            carries_floor=True,
            recognize=_alpha_numeric.recognize,
            extract_floor=_alpha_numeric.extract_floor,
            next_value=_alpha_numeric.next_value,
            default_first=_alpha_numeric.default_first,
        ),
        PatternDefinition(
            id=PatternId.WING_UNIT,
            name="Wing-Unit Format",
            label="wing-unit format",
            description="Wing letter followed by 3-digit unit number",
            example="A101, B201, C301",
            template="{wing}{floor}{unit}",
            property_types=("apartment", "condominium", "commercial"),
            carries_floor=True,
            recognize=_wing_unit.recognize,
            extract_floor=_wing_unit.extract_floor,
            next_value=_wing_unit.next_value,
            default_first=_wing_unit.default_first,
        ),
        PatternDefinition(
            id=PatternId.SEQUENTIAL,
            name="Sequential Numbers",
            label="sequential pattern",
            description="Simple sequential numbering starting from 1",
            example="1, 2, 3",
            template="{number}",
            property_types=("house", "townhouse"),
            recognize=_sequential_recognize,
            extract_floor=_no_floor,
            next_value=_sequential_next,
            default_first=_sequential_default,
        ),
        PatternDefinition(
            id=PatternId.CUSTOM,
            name="Custom Format",
            label="custom pattern",
            description="Free-form prefix followed by a numeric suffix",
            example="Unit-001, Apt-002",
            template="{prefix}-{number}",
            recognize=_custom_recognize,
            extract_floor=_no_floor,
            next_value=_custom_next,
            default_first=_custom_default,
        ),
        PatternDefinition(
            id=PatternId.NUMERIC,
            name="Numeric",
            label="numbering pattern",
            description="Fallback for empty unit numbers",
            example="1",
            template="{number}",
            recognize=_numeric_recognize,
            extract_floor=_no_floor,
            next_value=_sequential_next,
            default_first=_sequential_default,
        ),
    )
}

# Overlapping shapes are resolved by this order; do not reorder.
PATTERN_PRECEDENCE: tuple[PatternId, ...] = (
    PatternId.SUITE,
    PatternId.BUILDING_UNIT,
    PatternId.ALPHA_NUMERIC,
    PatternId.WING_UNIT,
    PatternId.SEQUENTIAL,
    PatternId.CUSTOM,
)


def detect_pattern(raw: str | None) -> PatternId:
    """Classify a unit number; empty input is `numeric`, anything else falls back to `custom`."""
    if not raw:
        return PatternId.NUMERIC
    for pattern_id in PATTERN_PRECEDENCE:
        if PATTERN_CATALOG[pattern_id].recognize(raw):
            return pattern_id
    return PatternId.CUSTOM


_LABELLED_PATTERNS = {
    PatternId.SUITE: _suite,
    PatternId.BUILDING_UNIT: _building_unit,
    PatternId.ALPHA_NUMERIC: _alpha_numeric,
    PatternId.WING_UNIT: _wing_unit,
}


def extract_prefix(raw: str | None) -> str | None:
    """Wing/building letter, `Suite` label or custom prefix of a unit number."""
    pattern_id = detect_pattern(raw)
    if pattern_id in _LABELLED_PATTERNS:
        return _LABELLED_PATTERNS[pattern_id].label_of(raw)
    if pattern_id is PatternId.CUSTOM:
        parsed = parse_custom_unit(raw)
        return parsed.prefix if parsed else None
    return None


def get_pattern(pattern_id: PatternId | str) -> PatternDefinition | None:
    try:
        return PATTERN_CATALOG.get(PatternId(pattern_id))
    except ValueError:
        return None
