"""
Transaction builder service.

Responsibility: turn raw expense rows into canonical transactions carrying
*ceiling* and *remanent*, and aggregate totals.  Pure business logic – no I/O.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List

from retirement.logging_setup import get_logger
from retirement.models.schemas import ParseResult, RawExpense, Transaction
from retirement.utils.financial import (
    ZERO,
    compute_ceiling,
    compute_remanent,
    to_decimal,
)
from retirement.utils.time_utils import format_timestamp, parse_timestamp, truncate_seconds

logger = get_logger(__name__)


def normalize_expense(expense: RawExpense) -> Transaction:
    """
    Build the canonical :class:`~retirement.models.schemas.Transaction` for *expense*.

    * ``date``     = timestamp re-emitted with seconds forced to ``00``
    * ``ceiling``  = smallest multiple of 100 >= amount
    * ``remanent`` = ceiling - amount

    Raises
    ------
    MalformedTimestamp
        If the timestamp cannot be parsed.
    """
    moment = parse_timestamp(expense.timestamp)
    amount = to_decimal(expense.amount)
    ceiling = compute_ceiling(amount)
    return Transaction(
        moment=moment,
        date=format_timestamp(truncate_seconds(moment)),
        amount=amount,
        ceiling=ceiling,
        remanent=compute_remanent(ceiling, amount),
    )


def normalize_all(expenses: Iterable[RawExpense]) -> List[Transaction]:
    """Normalize every expense; the first malformed timestamp aborts the batch."""
    return [normalize_expense(e) for e in expenses]


def build_transactions(expenses: List[RawExpense]) -> ParseResult:
    """
    Convert a list of raw expenses into canonical transactions.

    Also returns aggregate totals:
    * ``totalExpense``
    * ``totalCeiling``
    * ``totalRemanent``

    Raises
    ------
    MalformedTimestamp
        If any timestamp cannot be parsed.
    """
    transactions = normalize_all(expenses)

    total_expense = sum((t.amount for t in transactions), ZERO)
    total_ceiling = sum((t.ceiling for t in transactions), ZERO)
    total_remanent = sum((t.remanent for t in transactions), ZERO)

    logger.debug(
        "Parsed %d expenses (expense=%s, ceiling=%s, remanent=%s)",
        len(transactions), total_expense, total_ceiling, total_remanent,
    )

    return ParseResult(
        transactions=transactions,
        total_expense=total_expense,
        total_ceiling=total_ceiling,
        total_remanent=total_remanent,
    )
