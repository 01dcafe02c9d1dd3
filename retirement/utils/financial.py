"""
Financial utility functions.

All monetary values use :class:`decimal.Decimal` to guarantee
sub-cent accuracy and avoid IEEE-754 floating-point drift.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Tuple

from retirement.models.schemas import ProjectionConfig, RateTrack


# ── Constants ────────────────────────────────────────────────────────────────

HUNDRED = Decimal("100")
ZERO = Decimal("0")
ONE = Decimal("1")
CENT = Decimal("0.01")

NPS_MAX_ABSOLUTE = Decimal("200000")
NPS_WAGE_FRACTION = Decimal("0.10")

# (lower bound, marginal rate), highest bracket first.
TAX_BRACKETS: Tuple[Tuple[Decimal, Decimal], ...] = (
    (Decimal("1500000"), Decimal("0.30")),
    (Decimal("1200000"), Decimal("0.20")),
    (Decimal("1000000"), Decimal("0.15")),
    (Decimal("700000"), Decimal("0.10")),
)


# ── Rounding ─────────────────────────────────────────────────────────────────

def round2(value: Decimal) -> Decimal:
    """Round half-up to two decimal places."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


# ── Ceiling & remanent ───────────────────────────────────────────────────────

def compute_ceiling(amount: Decimal) -> Decimal:
    """
    Compute the smallest multiple of 100 that is >= *amount*.

    Examples
    --------
    >>> compute_ceiling(Decimal("150.75"))
    Decimal('200')
    >>> compute_ceiling(Decimal("200"))
    Decimal('200')
    """
    return (amount / HUNDRED).to_integral_value(rounding=ROUND_CEILING) * HUNDRED


def compute_remanent(ceiling: Decimal, amount: Decimal) -> Decimal:
    """
    Return ``ceiling - amount``.  Always >= 0 by construction.
    """
    return ceiling - amount


# ── Tax calculations ─────────────────────────────────────────────────────────

def calculate_tax(income: Decimal) -> Decimal:
    """
    Compute income tax under the simplified new-regime slabs.

    Slabs
    -----
    0  – 7 L  :  0 %
    7  – 10 L : 10 %
    10 – 12 L : 15 %
    12 – 15 L : 20 %
    15 L +    : 30 %

    The excess over the highest applicable slab is taxed first, then the
    income is lowered to that slab's floor and the next slab is peeled.
    """
    tax = ZERO
    for floor, rate in TAX_BRACKETS:
        if income > floor:
            tax += (income - floor) * rate
            income = floor
    return tax


def compute_nps_deduction(invested: Decimal, annual_income: Decimal) -> Decimal:
    """
    NPS 80CCD(1B) deduction = min(invested, 10 % of income, ₹2 L).
    """
    return min(invested, min(annual_income * NPS_WAGE_FRACTION, NPS_MAX_ABSOLUTE))


def compute_tax_benefit(invested: Decimal, annual_income: Decimal) -> Decimal:
    """
    Tax saved by deducting the NPS contribution from *annual_income*.

    taxBenefit = tax(income) - tax(income - deduction)
    """
    deduction = compute_nps_deduction(invested, annual_income)
    return round2(calculate_tax(annual_income) - calculate_tax(annual_income - deduction))


# ── Compound interest ────────────────────────────────────────────────────────

def resolve_investment_years(age: int, config: ProjectionConfig) -> int:
    """
    Years until retirement; a flat ``minimum_years`` once the retirement age is reached.
    """
    if age < config.retirement_age:
        return config.retirement_age - age
    return config.minimum_years


def compound_grow(principal: Decimal, rate: Decimal, years: int) -> Decimal:
    """
    Future value: principal × (1 + rate)^years.
    """
    return principal * (ONE + rate) ** years


def inflation_adjusted(nominal: Decimal, inflation_percent: Decimal, years: int) -> Decimal:
    """
    Real value: nominal / (1 + inflation/100)^years.
    """
    return nominal / (ONE + inflation_percent / HUNDRED) ** years


def project_growth(
    principal: Decimal,
    age: int,
    inflation_percent: Decimal,
    track: RateTrack,
    config: ProjectionConfig,
) -> Tuple[Decimal, Decimal, Decimal]:
    """
    Project *principal* to retirement on *track*.

    Returns
    -------
    tuple
        ``(future_value, real_value, profit)`` where only *profit* is rounded.
    """
    years = resolve_investment_years(age, config)
    future_value = compound_grow(principal, track.rate, years)
    real_value = inflation_adjusted(future_value, inflation_percent, years)
    return future_value, real_value, round2(real_value - principal)


# ── Serialisation helpers ────────────────────────────────────────────────────

def decimal_to_float(value: Decimal) -> float:
    """Convert Decimal → float for JSON serialisation."""
    return float(value)


def to_decimal(value: int | float | str) -> Decimal:
    """
    Safely convert a raw value to :class:`~decimal.Decimal`.

    Raises
    ------
    ValueError
        If *value* cannot be interpreted as a finite decimal number.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Cannot convert {value!r} to Decimal.")
    try:
        result = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Cannot convert {value!r} to Decimal: {exc}") from exc
    if not result.is_finite():
        raise ValueError(f"Cannot convert {value!r} to Decimal: not finite.")
    return result
