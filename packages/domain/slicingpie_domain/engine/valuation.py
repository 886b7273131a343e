"""Valuation mapper.

Two jobs:
    1. Produce a single company valuation (manual figure or SDE-multiple estimate)
    2. Map an ownership percentage onto that valuation in whole dollars

Auto valuation (SDE multiple):
    average_profit = mean(current year profit, historical profits)
    growth         = clamp(1 + 0.5 x annual growth rate, 0.5, 2.0)
    retention      = clamp(1 - 0.3 x churn / 100, 0.5, 1.0)
    value          = max(0, round(average_profit x 3.0 x growth x retention))

Whole-dollar rounding is half-up (floor(x + 0.5)) everywhere in this module.
"""

from typing import List, Optional, Sequence
from decimal import Decimal, ROUND_FLOOR

from ..schemas import (
    BusinessMetrics,
    ConfidenceLevel,
    ValuationBreakdown,
    ValuationConfig,
    ValuationHistoryEntry,
    ValuationMode,
    ValuationResult,
)

BASE_MULTIPLE = Decimal("3.0")

GROWTH_WEIGHT = Decimal("0.5")
GROWTH_MIN = Decimal("0.5")
GROWTH_MAX = Decimal("2.0")

CHURN_WEIGHT = Decimal("0.3")
RETENTION_MIN = Decimal("0.5")
RETENTION_MAX = Decimal("1.0")

MAX_HISTORY_ENTRIES = 20

ONE = Decimal("1")
HUNDRED = Decimal("100")
HALF = Decimal("0.5")


# =============================================================================
# Rounding
# =============================================================================

def round_dollars(amount: Decimal) -> Decimal:
    """Round to whole dollars, halves toward +infinity."""
    return (amount + HALF).to_integral_value(rounding=ROUND_FLOOR)


def round_hundredths(amount: Decimal) -> Decimal:
    return (amount * HUNDRED + HALF).to_integral_value(rounding=ROUND_FLOOR) / HUNDRED


def _clamp(value: Decimal, low: Decimal, high: Decimal) -> Decimal:
    return max(low, min(high, value))


# =============================================================================
# Multipliers
# =============================================================================

def calculate_growth_multiplier(metrics: BusinessMetrics, current_year: int) -> Decimal:
    """Growth adjustment from the earliest and latest profit years.

    The current year's profit is dated current_year. Growth is neutral (1.0)
    with fewer than two data points, a zero-year span, or a zero earliest
    profit.

    Example:
        2022: $100k, current year 2024: $150k
        rate = (150k - 100k) / 100k / 2 years = 25%/yr
        multiplier = 1 + 0.5 x 0.25 = 1.125
    """
    points = [(current_year, metrics.current_year_profit)]
    points.extend((p.year, p.profit) for p in metrics.profit_history)
    points.sort(key=lambda point: point[0])

    if len(points) < 2:
        return ONE

    earliest_year, earliest_profit = points[0]
    latest_year, latest_profit = points[-1]
    years = latest_year - earliest_year

    if years == 0 or earliest_profit == 0:
        return ONE

    growth_rate = (latest_profit - earliest_profit) / abs(earliest_profit) / years
    return _clamp(ONE + growth_rate * GROWTH_WEIGHT, GROWTH_MIN, GROWTH_MAX)


def calculate_retention_multiplier(churn_rate: Optional[Decimal]) -> Decimal:
    """Retention adjustment from annual churn (0-100). None -> 1.0."""
    if churn_rate is None:
        return ONE
    multiplier = ONE - (Decimal(churn_rate) / HUNDRED) * CHURN_WEIGHT
    return _clamp(multiplier, RETENTION_MIN, RETENTION_MAX)


def confidence_level(metrics: BusinessMetrics) -> ConfidenceLevel:
    """Grade the estimate by how much data backs it.

    high:   3+ years of profit AND a churn rate
    medium: 2+ years OR a churn rate
    low:    current year only, no churn
    """
    has_churn = metrics.churn_rate is not None

    if metrics.years_of_data >= 3 and has_churn:
        return "high"
    if metrics.years_of_data >= 2 or has_churn:
        return "medium"
    return "low"


# =============================================================================
# Valuation
# =============================================================================

def calculate_valuation(metrics: BusinessMetrics, current_year: int) -> ValuationResult:
    """Estimate a company valuation from business metrics.

    Args:
        metrics: Current and historical profit plus optional churn
        current_year: Calendar year the current profit belongs to

    Returns:
        ValuationResult with whole-dollar value, confidence and breakdown
    """
    profits = [metrics.current_year_profit] + [p.profit for p in metrics.profit_history]
    average_profit = sum(profits, Decimal("0")) / len(profits)

    growth = calculate_growth_multiplier(metrics, current_year)
    retention = calculate_retention_multiplier(metrics.churn_rate)

    adjusted = average_profit * BASE_MULTIPLE * growth * retention
    value = max(Decimal("0"), round_dollars(adjusted))

    return ValuationResult(
        value=value,
        confidence=confidence_level(metrics),
        breakdown=ValuationBreakdown(
            average_profit=round_dollars(average_profit),
            base_multiple=BASE_MULTIPLE,
            growth_multiplier=round_hundredths(growth),
            retention_multiplier=round_hundredths(retention),
        ),
    )


def current_valuation(
    mode: ValuationMode,
    manual_value: Optional[Decimal],
    metrics: Optional[BusinessMetrics],
    current_year: int,
) -> Optional[Decimal]:
    """Resolve the valuation in effect.

    manual: the manual figure as-is (None when unset)
    auto:   calculate_valuation(metrics).value, or None without metrics
    """
    if mode == "manual":
        return manual_value
    if mode == "auto" and metrics is not None:
        return calculate_valuation(metrics, current_year).value
    return None


def valuation_from_config(
    config: Optional[ValuationConfig], current_year: int
) -> Optional[Decimal]:
    if config is None:
        return None
    return current_valuation(
        config.mode, config.manual_value, config.business_metrics, current_year
    )


# =============================================================================
# Equity -> Dollars
# =============================================================================

def equity_value(percentage: Decimal, valuation: Decimal) -> Decimal:
    """Whole-dollar value of a 0-100 ownership percentage.

    Example:
        equity_value(Decimal("25"), Decimal("1000000")) -> Decimal("250000")
    """
    return round_dollars(Decimal(percentage) / HUNDRED * Decimal(valuation))


def vested_equity_value(
    vested_slices: Decimal, total_slices: Decimal, valuation: Decimal
) -> Decimal:
    """Whole-dollar value of vested slices as a share of ALL slices.

    Computed directly from the vested share, not as total minus unvested, so
    rounding never compounds.
    """
    if total_slices == 0:
        return Decimal("0")
    return round_dollars(Decimal(vested_slices) / Decimal(total_slices) * Decimal(valuation))


# =============================================================================
# History
# =============================================================================

def record_valuation(
    history: Sequence[ValuationHistoryEntry],
    entry: ValuationHistoryEntry,
    max_entries: int = MAX_HISTORY_ENTRIES,
) -> List[ValuationHistoryEntry]:
    """Return a new history list with entry first, capped at max_entries."""
    return [entry, *history][:max_entries]
