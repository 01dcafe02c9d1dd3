from decimal import Decimal

import pytest

from retirement.models.schemas import RawExpense
from retirement.services.transaction_service import build_transactions, normalize_expense
from retirement.utils.time_utils import MalformedTimestamp


def test_normalize_expense():
    txn = normalize_expense(RawExpense("2024-03-15 10:30:45", Decimal("150.75")))

    assert txn.date == "2024-03-15 10:30:00"
    assert txn.moment.second == 45
    assert txn.ceiling == Decimal("200")
    assert txn.remanent == Decimal("49.25")


def test_normalize_expense_is_idempotent():
    expense = RawExpense("2024-03-15 10:30", Decimal("99"))

    assert normalize_expense(expense) == normalize_expense(expense)
    assert normalize_expense(expense).date.endswith(":00")


def test_normalize_multiple_of_hundred_has_zero_remanent():
    txn = normalize_expense(RawExpense("2024-03-15 10:30", Decimal("300")))

    assert txn.ceiling == Decimal("300")
    assert txn.remanent == Decimal("0")


def test_build_transactions_totals():
    result = build_transactions([
        RawExpense("2023-10-12 20:15:30", Decimal("250")),
        RawExpense("2021-10-01 20:15", Decimal("1519")),
    ])

    assert [t.remanent for t in result.transactions] == [Decimal("50"), Decimal("81")]
    assert result.total_expense == Decimal("1769")
    assert result.total_ceiling == Decimal("1900")
    assert result.total_remanent == Decimal("131")


def test_build_transactions_propagates_malformed_timestamp():
    with pytest.raises(MalformedTimestamp):
        build_transactions([
            RawExpense("2023-10-12 20:15:30", Decimal("250")),
            RawExpense("12/10/2023", Decimal("10")),
        ])
