"""
Immutable data models / schemas for the retirement-savings API.

These dataclasses serve as typed containers that travel between
the route → service → model layers.  No business logic lives here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple


#Raw input atoms
@dataclass(frozen=True)
class RawExpense:
    """Single raw expense row as received from the client."""
    timestamp: str
    amount: Decimal


#Normalized transaction (output of builder)
@dataclass(frozen=True)
class Transaction:
    """
    Canonical transaction with ceiling and remanent.

    ``moment`` keeps the parsed timestamp (seconds included) for window
    matching; ``date`` is the emitted string with seconds forced to zero.
    """
    moment: datetime
    date: str
    amount: Decimal
    ceiling: Decimal
    remanent: Decimal

    def to_dict(self) -> dict:
        from retirement.utils.financial import decimal_to_float
        return {
            "date": self.date,
            "amount": decimal_to_float(self.amount),
            "ceiling": decimal_to_float(self.ceiling),
            "remanent": decimal_to_float(self.remanent),
        }


#Parser output
@dataclass(frozen=True)
class ParseResult:
    """Output of the transaction builder service."""
    transactions: List[Transaction]
    total_expense: Decimal
    total_ceiling: Decimal
    total_remanent: Decimal

    def to_dict(self) -> list:
        return [t.to_dict() for t in self.transactions]


#Temporal window definitions
@dataclass(frozen=True)
class FixedWindow:
    """Replace *remanent* with *fixed* for transactions in [start, end]."""
    fixed: Decimal
    start: datetime
    end: datetime


@dataclass(frozen=True)
class ExtraWindow:
    """Add *extra* to *remanent* for transactions in [start, end]."""
    extra: Decimal
    start: datetime
    end: datetime


@dataclass(frozen=True)
class GroupWindow:
    """
    Aggregation bucket [start, end].

    ``raw_start`` / ``raw_end`` hold the original input strings so that
    calendar oddities like ``"2023-11-31"`` are echoed back verbatim.
    """
    start: datetime
    end: datetime
    raw_start: str = ""
    raw_end: str = ""


#Overlay resolver output
@dataclass(frozen=True)
class ResolvedTransaction:
    """A transaction after validity checks and Q → P overlays."""
    transaction: Transaction
    remanent: Decimal
    reason: Optional[str] = None
    groups: Tuple[int, ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.reason is None

    @property
    def in_any_group(self) -> bool:
        return bool(self.groups)

    def to_dict(self) -> dict:
        from retirement.utils.financial import decimal_to_float
        txn = self.transaction
        if not self.is_valid:
            return {
                "date": txn.date,
                "amount": decimal_to_float(txn.amount),
                "message": self.reason,
            }
        return {
            "date": txn.date,
            "amount": decimal_to_float(txn.amount),
            "ceiling": decimal_to_float(txn.ceiling),
            "remanent": decimal_to_float(self.remanent),
            "inKPeriod": self.in_any_group,
        }


@dataclass(frozen=True)
class OverlayResolution:
    """
    Output of the temporal overlay resolver.

    ``group_totals[i]`` is the summed resolved remanent of valid transactions
    inside ``GroupWindow`` number *i*.
    """
    transactions: List[ResolvedTransaction]
    group_totals: List[Decimal]

    @property
    def valid(self) -> List[ResolvedTransaction]:
        return [t for t in self.transactions if t.is_valid]

    @property
    def invalid(self) -> List[ResolvedTransaction]:
        return [t for t in self.transactions if not t.is_valid]

    def to_dict(self) -> dict:
        return {
            "valid": [t.to_dict() for t in self.valid],
            "invalid": [t.to_dict() for t in self.invalid],
        }


#Validation output
@dataclass(frozen=True)
class InvalidTransaction:
    """A transaction that failed one of the validator rules."""
    transaction: Transaction
    message: str

    def to_dict(self) -> dict:
        d = self.transaction.to_dict()
        d["message"] = self.message
        return d


@dataclass(frozen=True)
class ValidationResult:
    """Output of the transaction validator service."""
    valid: List[Transaction]
    invalid: List[InvalidTransaction]

    def to_dict(self) -> dict:
        return {
            "valid": [t.to_dict() for t in self.valid],
            "invalid": [t.to_dict() for t in self.invalid],
        }


#Projection parameters
@dataclass(frozen=True)
class Profile:
    age: int
    monthly_wage: Decimal
    inflation_percent: Decimal

    @property
    def annual_income(self) -> Decimal:
        return self.monthly_wage * 12


@dataclass(frozen=True)
class RateTrack:
    """An investment vehicle with a fixed nominal annual rate."""
    name: str
    rate: Decimal
    tax_advantaged: bool = False


@dataclass(frozen=True)
class ProjectionConfig:
    retirement_age: int = 60
    minimum_years: int = 5


#Returns output schemas
@dataclass(frozen=True)
class SavingsBucket:
    """Compounded return figure for one group window."""
    start: str
    end: str
    amount: Decimal
    profit: Decimal
    tax_benefit: Decimal

    def to_dict(self) -> dict:
        from retirement.utils.financial import decimal_to_float
        return {
            "start": self.start,
            "end": self.end,
            "amount": decimal_to_float(self.amount),
            "profit": decimal_to_float(self.profit),
            "taxBenefit": decimal_to_float(self.tax_benefit),
        }


@dataclass(frozen=True)
class ReturnsResult:
    """Output of the returns service for a single track."""
    total_transaction_amount: Decimal
    total_ceiling: Decimal
    savings_by_dates: List[SavingsBucket]

    @property
    def total_invested(self) -> Decimal:
        return sum((s.amount for s in self.savings_by_dates), Decimal("0"))

    @property
    def total_profit(self) -> Decimal:
        return sum((s.profit for s in self.savings_by_dates), Decimal("0"))

    @property
    def total_tax_benefit(self) -> Decimal:
        return sum((s.tax_benefit for s in self.savings_by_dates), Decimal("0"))

    def to_dict(self) -> dict:
        from retirement.utils.financial import decimal_to_float
        return {
            "totalTransactionAmount": decimal_to_float(self.total_transaction_amount),
            "totalCeiling": decimal_to_float(self.total_ceiling),
            "savingsByDates": [s.to_dict() for s in self.savings_by_dates],
        }


#Comparison output schemas
@dataclass(frozen=True)
class Recommendation:
    narrative: str
    risk_profile: str
    market_percent: int
    tax_advantaged_percent: int
    reasoning: str

    def to_dict(self) -> dict:
        return {
            "narrative": self.narrative,
            "riskProfile": self.risk_profile,
            "marketPercent": self.market_percent,
            "taxAdvantagedPercent": self.tax_advantaged_percent,
            "reasoning": self.reasoning,
        }


@dataclass(frozen=True)
class ComparisonResult:
    """Side-by-side NPS vs index projection with a recommendation."""
    nps: ReturnsResult
    index: ReturnsResult
    nps_effective_gain: Decimal
    index_effective_gain: Decimal
    recommendation: Recommendation

    def to_dict(self) -> dict:
        from retirement.utils.financial import decimal_to_float, round2
        return {
            "totalTransactionAmount": decimal_to_float(self.nps.total_transaction_amount),
            "totalCeiling": decimal_to_float(self.nps.total_ceiling),
            "totalInvestable": decimal_to_float(round2(self.nps.total_invested)),
            "npsSavings": [s.to_dict() for s in self.nps.savings_by_dates],
            "npsTotalProfit": decimal_to_float(round2(self.nps.total_profit)),
            "npsTotalTaxBenefit": decimal_to_float(round2(self.nps.total_tax_benefit)),
            "npsEffectiveGain": decimal_to_float(round2(self.nps_effective_gain)),
            "indexSavings": [s.to_dict() for s in self.index.savings_by_dates],
            "indexTotalProfit": decimal_to_float(round2(self.index.total_profit)),
            "indexEffectiveGain": decimal_to_float(round2(self.index_effective_gain)),
            "recommendation": self.recommendation.to_dict(),
        }


#Summary output
@dataclass(frozen=True)
class SummaryResult:
    """Spending insights and investment-readiness score."""
    total_transactions: int
    valid_transactions: int
    invalid_transactions: int
    readiness_score: int
    readiness_label: str
    tips: List[str] = field(default_factory=list)
    total_spent: Optional[Decimal] = None
    average_spend: Optional[Decimal] = None
    highest_spend: Optional[Decimal] = None
    highest_spend_date: Optional[str] = None
    lowest_spend: Optional[Decimal] = None
    lowest_spend_date: Optional[str] = None
    total_savings_potential: Optional[Decimal] = None
    average_savings_per_transaction: Optional[Decimal] = None
    monthly_savings_estimate: Optional[Decimal] = None
    annual_savings_projection: Optional[Decimal] = None

    def to_dict(self) -> dict:
        from retirement.utils.financial import decimal_to_float
        d = {
            "totalTransactions": self.total_transactions,
            "validTransactions": self.valid_transactions,
            "invalidTransactions": self.invalid_transactions,
            "investmentReadinessScore": self.readiness_score,
            "investmentReadinessLabel": self.readiness_label,
            "tips": list(self.tips),
        }
        optional = {
            "totalSpent": self.total_spent,
            "averageSpend": self.average_spend,
            "highestSpend": self.highest_spend,
            "highestSpendDate": self.highest_spend_date,
            "lowestSpend": self.lowest_spend,
            "lowestSpendDate": self.lowest_spend_date,
            "totalSavingsPotential": self.total_savings_potential,
            "averageSavingsPerTransaction": self.average_savings_per_transaction,
            "monthlySavingsEstimate": self.monthly_savings_estimate,
            "annualSavingsProjection": self.annual_savings_projection,
        }
        for key, value in optional.items():
            if value is None:
                continue
            d[key] = decimal_to_float(value) if isinstance(value, Decimal) else value
        return d
