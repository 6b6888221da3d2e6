"""Unit numbering module for PropUnit.

Infers unit naming conventions, checks floor correlation, generates the next
unit number and detects numbering conflicts.
"""

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
from .patterns import PATTERN_CATALOG, PATTERN_PRECEDENCE, PatternDefinition
from .routers import router

__all__ = [
    # Models
    "PatternId",
    "UnitRecord",
    "CustomUnitNumber",
    "ValidationResult",
    "ConflictResult",
    "ConsistencyResult",
    "NumberSuggestion",
    "BatchRejection",
    "BatchValidationResult",
    # Catalog
    "PatternDefinition",
    "PATTERN_CATALOG",
    "PATTERN_PRECEDENCE",
    # Routers
    "router",
]
