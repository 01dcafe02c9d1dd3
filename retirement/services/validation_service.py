"""
Transaction validator service.

Responsibility: apply the standalone business rules to a transaction list
and partition results into *valid* / *invalid* buckets.

Rules (applied in order, first failure wins):
1. ``amount`` >= 0.
2. No duplicate timestamps (compared against previously accepted ones).
3. ``amount`` below the configured maximum (5 × 10^5 by default).
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Sequence, Set

from retirement.config import settings
from retirement.logging_setup import get_logger
from retirement.models.schemas import InvalidTransaction, Transaction, ValidationResult
from retirement.utils.financial import ZERO

logger = get_logger(__name__)

MSG_NEGATIVE = "Negative amounts are not allowed"
MSG_DUPLICATE = "Duplicate transaction"
MSG_TOO_LARGE = "Amount exceeds maximum allowed value"


def check_transaction(
    txn: Transaction,
    seen_dates: Set[str],
    max_amount: Decimal,
) -> Optional[str]:
    """Return the first failing rule's message, or ``None`` when *txn* passes."""
    if txn.amount < ZERO:
        return MSG_NEGATIVE
    if txn.date in seen_dates:
        return MSG_DUPLICATE
    if txn.amount >= max_amount:
        return MSG_TOO_LARGE
    return None


def validate_transactions(
    transactions: Sequence[Transaction],
    max_amount: Optional[Decimal] = None,
) -> ValidationResult:
    """
    Apply all validation rules and return a :class:`~retirement.models.schemas.ValidationResult`.

    Parameters
    ----------
    transactions:
        Transaction records as supplied by the client.
    max_amount:
        Exclusive upper bound on ``amount``; defaults to the configured value.
    """
    if max_amount is None:
        max_amount = settings.MAX_TRANSACTION_AMOUNT

    valid: List[Transaction] = []
    invalid: List[InvalidTransaction] = []
    seen_dates: Set[str] = set()

    for txn in transactions:
        message = check_transaction(txn, seen_dates, max_amount)
        if message is not None:
            invalid.append(InvalidTransaction(transaction=txn, message=message))
            continue
        seen_dates.add(txn.date)
        valid.append(txn)

    logger.debug("Validated %d transactions (%d invalid)", len(transactions), len(invalid))
    return ValidationResult(valid=valid, invalid=invalid)
