"""
Spending summary service.

Produces spending insights, savings potential and an investment-readiness
score from a transaction list.  Validity follows the standalone validator.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Sequence, Tuple

from retirement.models.schemas import SummaryResult, Transaction
from retirement.services.validation_service import validate_transactions
from retirement.utils.financial import ZERO, compute_ceiling, compute_remanent, round2

TRANSACTIONS_PER_MONTH = 30

# (minimum score, label), highest first.
READINESS_LABELS: Tuple[Tuple[int, str], ...] = (
    (80, "Excellent - Ready to invest aggressively"),
    (60, "Good - Can start regular investments"),
    (40, "Moderate - Consider building an emergency fund first"),
    (20, "Low - Focus on reducing expenses"),
)
LOWEST_LABEL = "Very Low - Need financial planning"


def readiness_score(
    valid_count: int,
    invalid_count: int,
    avg_savings: Decimal,
    total_spent: Decimal,
) -> int:
    score = 50

    valid_ratio = Decimal(valid_count) / (valid_count + invalid_count)
    score += int(valid_ratio * 20)

    savings_ratio = avg_savings / (total_spent / valid_count) if total_spent > ZERO else ZERO
    score += int(min(savings_ratio, Decimal("0.5")) * 40)

    if valid_count < 3:
        score -= 15

    return max(0, min(100, score))


def readiness_label(score: int) -> str:
    return next((label for floor, label in READINESS_LABELS if score >= floor), LOWEST_LABEL)


def _tips(score: int, avg_savings: Decimal, total_spent: Decimal,
          valid_count: int, invalid_count: int) -> List[str]:
    tips: List[str] = []

    if avg_savings < 20:
        tips.append(
            "Your average savings per transaction is low. Try rounding up your "
            "spends to save more spare change."
        )
    if invalid_count > 0:
        tips.append(
            f"You have {invalid_count} invalid transactions. Review and fix them "
            "to maximize your investment pool."
        )
    if score >= 70:
        tips.append(
            "You're in great shape! Consider splitting investments between NPS "
            "(for tax benefits) and Index Funds (for higher growth)."
        )
    if total_spent > 10000 and avg_savings > 30:
        tips.append(
            "Your spending pattern generates good savings. Automate your "
            "investments to stay consistent."
        )
    if valid_count >= 5:
        tips.append(
            "Consistent transaction history detected. You qualify for a "
            "disciplined savings plan."
        )
    if not tips:
        tips.append(
            "Start by tracking all your expenses. Every rupee saved is a rupee invested."
        )
    return tips


def summarize(transactions: Sequence[Transaction]) -> SummaryResult:
    """
    Analyse *transactions* and return a :class:`~retirement.models.schemas.SummaryResult`.

    Ceiling and remanent are recomputed from ``amount``; client-supplied
    values are ignored.
    """
    if not transactions:
        return SummaryResult(
            total_transactions=0,
            valid_transactions=0,
            invalid_transactions=0,
            readiness_score=0,
            readiness_label="No data",
            tips=["Start tracking your expenses to build a savings plan."],
        )

    validation = validate_transactions(transactions)
    valid = validation.valid
    invalid_count = len(validation.invalid)

    if not valid:
        return SummaryResult(
            total_transactions=len(transactions),
            valid_transactions=0,
            invalid_transactions=invalid_count,
            readiness_score=0,
            readiness_label="Not ready",
            tips=["All your transactions are invalid. Check for negative amounts or duplicates."],
        )

    total_spent = sum((t.amount for t in valid), ZERO)
    total_savings = sum(
        (compute_remanent(compute_ceiling(t.amount), t.amount) for t in valid), ZERO
    )
    # first occurrence wins on ties
    highest = max(valid, key=lambda t: t.amount)
    lowest = min(valid, key=lambda t: t.amount)

    avg_spend = total_spent / len(valid)
    avg_savings = total_savings / len(valid)
    monthly = round2(avg_savings * TRANSACTIONS_PER_MONTH)
    annual = round2(monthly * 12)

    score = readiness_score(len(valid), invalid_count, avg_savings, total_spent)

    return SummaryResult(
        total_transactions=len(transactions),
        valid_transactions=len(valid),
        invalid_transactions=invalid_count,
        readiness_score=score,
        readiness_label=readiness_label(score),
        tips=_tips(score, avg_savings, total_spent, len(valid), invalid_count),
        total_spent=round2(total_spent),
        average_spend=round2(avg_spend),
        highest_spend=round2(highest.amount),
        highest_spend_date=highest.date,
        lowest_spend=round2(lowest.amount),
        lowest_spend_date=lowest.date,
        total_savings_potential=round2(total_savings),
        average_savings_per_transaction=round2(avg_savings),
        monthly_savings_estimate=monthly,
        annual_savings_projection=annual,
    )
