"""Base classes and type system for Slicing Pie domain models.

This module provides the foundational types, validators, and base classes
used throughout the equity schema system.
"""

from decimal import Decimal
from typing import Annotated
from pydantic import BaseModel, Field, ConfigDict

# =============================================================================
# Base Model
# =============================================================================

class DomainModel(BaseModel):
    """Base class for all domain models.

    Provides common configuration for all Pydantic models in the domain layer:
    - Validation on assignment for runtime safety
    - Support for Decimal and date types
    - Enum value serialization
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,  # Validate on field assignment
        use_enum_values=True,  # Use enum values in JSON
        arbitrary_types_allowed=True,  # Allow Decimal, date, etc.
    )


# =============================================================================
# Type Aliases - Numeric
# =============================================================================

SliceCount = Annotated[
    Decimal,
    Field(description="Number of slices (fractional slices are legal)")
]

MoneyAmount = Annotated[
    Decimal,
    Field(ge=0, description="Dollar amount (non-negative)")
]

HourlyRate = Annotated[
    Decimal,
    Field(ge=0, description="Hourly rate in dollars used for time contributions")
]

PercentValue = Annotated[
    Decimal,
    Field(ge=0, le=100, description="Percentage on a 0-100 scale")
]

ChurnRate = Annotated[
    Decimal,
    Field(ge=0, le=100, description="Annual customer churn on a 0-100 scale")
]

MonthCount = Annotated[
    int,
    Field(ge=0, description="Whole calendar months (non-negative)")
]


# =============================================================================
# ID Conventions
# =============================================================================

ContributorId = Annotated[
    str,
    Field(
        min_length=1,
        description="Opaque contributor identifier (UUID or user-defined)"
    )
]

ContributionId = Annotated[
    str,
    Field(
        min_length=1,
        description="Opaque contribution identifier (UUID or user-defined)"
    )
]


# =============================================================================
# ID Examples and Conventions
# =============================================================================
#
# Contributor IDs:
#   - "550e8400-e29b-41d4-a716-446655440000" - generated by the persistence layer
#   - "alice" - hand-written fixtures and sample data
#
# Contribution IDs:
#   - Same conventions as contributor IDs. A contribution always points at
#     its owner through contributor_id, even after soft deletion.
#
# =============================================================================
