"""Unit numbering API routes.

Every request carries its own existing-units snapshot; nothing is persisted.
"""

from fastapi import APIRouter

from ...config import settings
from ...core.exceptions import NotFoundError, ValidationError
from ..commons import BaseResponse
from . import services
from .patterns import PatternDefinition
from .schemas import (
    BatchValidationRequest,
    BatchValidationResponse,
    ConflictCheckRequest,
    ConflictResultResponse,
    ConsistencyCheckRequest,
    ConsistencyResultResponse,
    DetectPatternRequest,
    DetectPatternResponse,
    FloorCorrelationRequest,
    FloorSuggestionRequest,
    NextNumberRequest,
    NumberSuggestionResponse,
    PatternInfoResponse,
    UnitRecordSchema,
    UnitUpdateValidationRequest,
    ValidationResultResponse,
    to_records,
)

router = APIRouter(prefix="/unit-numbering", tags=["Unit Numbering"])


def _check_snapshot_size(units: list[UnitRecordSchema], field: str) -> None:
    limit = settings.numbering_max_existing_units
    if len(units) > limit:
        raise ValidationError(
            f"At most {limit} units can be validated per request, got {len(units)}",
            field=field,
        )


def _pattern_info(definition: PatternDefinition) -> PatternInfoResponse:
    return PatternInfoResponse(
        id=definition.id,
        name=definition.name,
        description=definition.description,
        example=definition.example,
        template=definition.template,
        property_types=list(definition.property_types),
        carries_floor=definition.carries_floor,
        default_first=definition.default_first(),
    )


# ----- Pattern Catalog -----


@router.get("/patterns", response_model=BaseResponse[list[PatternInfoResponse]])
async def list_patterns():
    """Get all numbering patterns."""
    return BaseResponse(
        success=True,
        data=[_pattern_info(d) for d in services.list_patterns()],
    )


@router.get("/patterns/{pattern_id}", response_model=BaseResponse[PatternInfoResponse])
async def get_pattern(pattern_id: str):
    """Get a numbering pattern by ID."""
    definition = services.get_pattern_info(pattern_id)
    if definition is None:
        raise NotFoundError(f"Numbering pattern '{pattern_id}' not found")
    return BaseResponse(success=True, data=_pattern_info(definition))


# ----- Classification -----


@router.post("/detect", response_model=BaseResponse[DetectPatternResponse])
async def detect_pattern(data: DetectPatternRequest):
    """Detect the numbering pattern and implied floor of a unit number."""
    return BaseResponse(
        success=True,
        data=DetectPatternResponse(
            unit_number=data.unit_number,
            pattern=services.detect_numbering_pattern(data.unit_number),
            expected_floor=services.extract_expected_floor_from_unit_number(
                data.unit_number
            ),
        ),
    )


@router.post(
    "/floor-correlation", response_model=BaseResponse[ValidationResultResponse]
)
async def validate_floor_correlation(data: FloorCorrelationRequest):
    """Check a declared floor against the floor implied by the unit number."""
    result = services.validate_unit_number_floor_correlation(
        data.unit_number, data.floor
    )
    return BaseResponse(
        success=True,
        message=result.message or None,
        data=ValidationResultResponse.model_validate(result),
    )


# ----- Generation -----


@router.post("/next", response_model=BaseResponse[NumberSuggestionResponse])
async def generate_next_number(data: NextNumberRequest):
    """Generate the next unit number for a pattern."""
    _check_snapshot_size(data.existing_units, "existing_units")
    suggestion = services.generate_next_unit_number(
        to_records(data.existing_units),
        data.pattern,
        floor=data.floor,
        prefix=data.prefix,
        suggested_number=data.suggested_number,
    )
    return BaseResponse(
        success=True,
        message=suggestion.recommendation,
        data=NumberSuggestionResponse.model_validate(suggestion),
    )


@router.post("/next-for-floor", response_model=BaseResponse[NumberSuggestionResponse])
async def suggest_number_for_floor(data: FloorSuggestionRequest):
    """Suggest the next unit number on a specific floor."""
    _check_snapshot_size(data.existing_units, "existing_units")
    suggestion = services.suggest_unit_number_for_floor(
        data.floor, to_records(data.existing_units), data.pattern
    )
    return BaseResponse(
        success=True,
        message=suggestion.recommendation,
        data=NumberSuggestionResponse.model_validate(suggestion),
    )


# ----- Validation -----


@router.post("/conflicts", response_model=BaseResponse[ConflictResultResponse])
async def check_conflicts(data: ConflictCheckRequest):
    """Check a unit number for collisions with existing units."""
    _check_snapshot_size(data.existing_units, "existing_units")
    result = services.detect_conflicts(
        data.unit_number,
        to_records(data.existing_units),
        exclude_unit_id=data.exclude_unit_id,
    )
    return BaseResponse(
        success=True,
        data=ConflictResultResponse.model_validate(result),
    )


@router.post("/consistency", response_model=BaseResponse[ConsistencyResultResponse])
async def check_consistency(data: ConsistencyCheckRequest):
    """Check whether all units share one numbering pattern."""
    _check_snapshot_size(data.units, "units")
    result = services.validate_pattern_consistency(to_records(data.units))
    return BaseResponse(
        success=True,
        message=result.recommendation,
        data=ConsistencyResultResponse.model_validate(result),
    )


@router.post(
    "/validate-update", response_model=BaseResponse[ValidationResultResponse]
)
async def validate_update(data: UnitUpdateValidationRequest):
    """Validate a unit number before a unit is created or updated."""
    _check_snapshot_size(data.existing_units, "existing_units")
    result = services.validate_unit_number_update(
        data.unit_number,
        data.floor,
        to_records(data.existing_units),
        exclude_unit_id=data.exclude_unit_id,
    )
    return BaseResponse(
        success=True,
        message=result.message,
        data=ValidationResultResponse.model_validate(result),
    )


@router.post("/validate-batch", response_model=BaseResponse[BatchValidationResponse])
async def validate_batch(data: BatchValidationRequest):
    """Validate units created together in bulk."""
    _check_snapshot_size(data.units, "units")
    _check_snapshot_size(data.existing_units, "existing_units")
    result = services.validate_unit_batch(
        to_records(data.units), to_records(data.existing_units)
    )
    return BaseResponse(
        success=True,
        message=(
            f"{len(result.accepted)} unit(s) accepted, "
            f"{len(result.rejected)} rejected"
        ),
        data=BatchValidationResponse.model_validate(result),
    )
