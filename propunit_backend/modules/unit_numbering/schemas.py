"""Unit numbering request/response schemas for PropUnit."""

from pydantic import BaseModel, Field, field_validator

from ...core.utils import sanitize_string
from .models import PatternId, UnitRecord

UNIT_NUMBER_MAX_LENGTH = 50


# ----- Unit Records -----


class UnitRecordSchema(BaseModel):
    """A sibling unit in an existing-units snapshot."""

    unit_number: str = Field(..., max_length=UNIT_NUMBER_MAX_LENGTH)
    unit_type: str = Field(default="", max_length=50)
    floor: int | None = None
    id: str | None = Field(None, max_length=64)

    @field_validator("unit_number", mode="before")
    @classmethod
    def strip_unit_number(cls, value):
        # Length is enforced by the field, never by truncating
        if isinstance(value, str):
            return sanitize_string(value, max_length=None)
        return value

    class Config:
        from_attributes = True

    def to_record(self) -> UnitRecord:
        return UnitRecord(
            unit_number=self.unit_number,
            unit_type=self.unit_type,
            floor=self.floor,
            id=self.id,
        )


def to_records(units: list[UnitRecordSchema]) -> list[UnitRecord]:
    return [unit.to_record() for unit in units]


class UnitNumberInput(BaseModel):
    """Base schema for requests about a single unit number."""

    unit_number: str = Field(..., max_length=UNIT_NUMBER_MAX_LENGTH)

    @field_validator("unit_number", mode="before")
    @classmethod
    def strip_unit_number(cls, value):
        # Length is enforced by the field, never by truncating
        if isinstance(value, str):
            return sanitize_string(value, max_length=None)
        return value


# ----- Requests -----


class DetectPatternRequest(UnitNumberInput):
    pass


class FloorCorrelationRequest(UnitNumberInput):
    floor: int


class NextNumberRequest(BaseModel):
    """Schema for generating the next unit number."""

    pattern: PatternId
    existing_units: list[UnitRecordSchema] = []
    floor: int | None = None
    prefix: str | None = Field(None, min_length=1, max_length=20)
    suggested_number: str | None = Field(None, max_length=UNIT_NUMBER_MAX_LENGTH)


class FloorSuggestionRequest(BaseModel):
    """Schema for suggesting a unit number on a specific floor."""

    pattern: PatternId
    floor: int
    existing_units: list[UnitRecordSchema] = []


class ConflictCheckRequest(UnitNumberInput):
    existing_units: list[UnitRecordSchema] = []
    exclude_unit_id: str | None = None


class ConsistencyCheckRequest(BaseModel):
    units: list[UnitRecordSchema] = []


class UnitUpdateValidationRequest(UnitNumberInput):
    """Schema for validating a unit number before create/update."""

    floor: int | None = None
    existing_units: list[UnitRecordSchema] = []
    exclude_unit_id: str | None = None


class BatchValidationRequest(BaseModel):
    """Schema for validating units created together in bulk."""

    units: list[UnitRecordSchema] = Field(..., min_length=1)
    existing_units: list[UnitRecordSchema] = []


# ----- Responses -----


class PatternInfoResponse(BaseModel):
    """Pattern catalog entry."""

    id: PatternId
    name: str
    description: str
    example: str
    template: str
    property_types: list[str] = []
    carries_floor: bool
    default_first: str


class DetectPatternResponse(BaseModel):
    unit_number: str
    pattern: PatternId
    expected_floor: int | None = None


class ValidationResultResponse(BaseModel):
    is_valid: bool
    message: str
    pattern: PatternId
    suggestion: str | None = None
    suggested_floor: int | None = None
    conflict: bool | None = None

    class Config:
        from_attributes = True


class NumberSuggestionResponse(BaseModel):
    next_number: str
    pattern: PatternId
    recommendation: str
    is_consistent: bool = True

    class Config:
        from_attributes = True


class ConflictResultResponse(BaseModel):
    has_conflict: bool
    conflicting_unit: str | None = None
    suggestion: str | None = None

    class Config:
        from_attributes = True


class ConsistencyResultResponse(BaseModel):
    is_consistent: bool
    detected_patterns: list[PatternId] = []
    recommendation: str

    class Config:
        from_attributes = True


class BatchRejectionResponse(BaseModel):
    index: int
    unit_number: str
    message: str
    suggestion: str | None = None

    class Config:
        from_attributes = True


class BatchValidationResponse(BaseModel):
    is_valid: bool
    consistency: ConsistencyResultResponse
    accepted: list[UnitRecordSchema] = []
    rejected: list[BatchRejectionResponse] = []

    class Config:
        from_attributes = True
