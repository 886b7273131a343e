"""Company valuation models.

A valuation turns equity percentages into notional dollar values. It comes
from one of two modes:
    - manual: the founders type in a number
    - auto:   an SDE-multiple estimate derived from business metrics

Auto formula:
    value = max(0, round(average_profit x 3.0 x growth x retention))

All dollar amounts are whole dollars once they leave the engine.
"""

from typing import List, Literal, Optional
from decimal import Decimal
from datetime import datetime
from pydantic import Field, field_validator

from .base import DomainModel, MoneyAmount, ChurnRate


ValuationMode = Literal["manual", "auto"]
ConfidenceLevel = Literal["high", "medium", "low"]

MAX_HISTORY_YEARS = 5


# =============================================================================
# Business Metrics
# =============================================================================

class ProfitYear(DomainModel):
    """A single historical year of profit (may be negative)."""

    year: int = Field(
        description="Calendar year, e.g. 2023"
    )

    profit: Decimal = Field(
        description="Profit in dollars for that year (negative = loss)"
    )


class BusinessMetrics(DomainModel):
    """Inputs for the auto valuation mode.

    Example:
        BusinessMetrics(
            current_year_profit=Decimal("120000"),
            profit_history=[
                ProfitYear(year=2023, profit=Decimal("90000")),
                ProfitYear(year=2022, profit=Decimal("60000")),
            ],
            churn_rate=Decimal("10"),
        )
    """

    current_year_profit: Decimal = Field(
        default=Decimal("0"),
        description="Profit for the current year in dollars"
    )

    profit_history: List[ProfitYear] = Field(
        default_factory=list,
        description=f"Up to {MAX_HISTORY_YEARS} prior years of profit"
    )

    churn_rate: Optional[ChurnRate] = Field(
        default=None,
        description="Annual churn as a 0-100 percentage. None = not provided"
    )

    @field_validator("profit_history")
    @classmethod
    def validate_history_length(cls, v: List[ProfitYear]) -> List[ProfitYear]:
        if len(v) > MAX_HISTORY_YEARS:
            raise ValueError(
                f"profit_history supports at most {MAX_HISTORY_YEARS} years, got {len(v)}"
            )
        return v

    @property
    def years_of_data(self) -> int:
        """Historical years plus the current year."""
        return len(self.profit_history) + 1


# =============================================================================
# Valuation Config and Results
# =============================================================================

class ValuationConfig(DomainModel):
    """Valuation settings supplied by the caller.

    The engine does not own this record; it only reads mode, manual_value and
    business_metrics to produce a current valuation figure.
    """

    enabled: bool = Field(
        default=False,
        description="Whether the valuation feature is switched on"
    )

    disclaimer_acknowledged: bool = Field(
        default=False,
        description="User accepted the not-financial-advice disclaimer"
    )

    mode: ValuationMode = Field(
        default="manual",
        description="manual = typed-in figure, auto = derived from metrics"
    )

    manual_value: Optional[MoneyAmount] = Field(
        default=None,
        description="Manual valuation in dollars"
    )

    business_metrics: Optional[BusinessMetrics] = Field(
        default=None,
        description="Metrics for auto mode"
    )

    last_updated: Optional[datetime] = None


class ValuationBreakdown(DomainModel):
    """How an auto valuation was assembled (display values, already rounded)."""

    average_profit: Decimal
    base_multiple: Decimal
    growth_multiplier: Decimal
    retention_multiplier: Decimal


class ValuationResult(DomainModel):
    """Auto valuation with a confidence grade derived from data completeness."""

    value: MoneyAmount
    confidence: ConfidenceLevel
    breakdown: ValuationBreakdown


class ValuationHistoryEntry(DomainModel):
    """Snapshot of a valuation for the history list."""

    id: str
    timestamp: datetime
    mode: ValuationMode
    value: MoneyAmount

    manual_value: Optional[MoneyAmount] = None
    business_metrics: Optional[BusinessMetrics] = None
