"""
Request-body parsing helpers shared by the blueprints.

Every helper raises ``ValueError`` / ``TypeError`` / ``KeyError`` on a bad
payload; routes translate those into HTTP 422.
"""

from __future__ import annotations

from typing import Any, Dict, List

from retirement.models.schemas import (
    ExtraWindow,
    FixedWindow,
    GroupWindow,
    Profile,
    RawExpense,
    Transaction,
)
from retirement.utils.financial import compute_ceiling, compute_remanent, to_decimal
from retirement.utils.time_utils import format_timestamp, parse_timestamp


def require_field(obj: Dict[str, Any], key: str) -> Any:
    if not isinstance(obj, dict):
        raise TypeError(f"Expected an object, got {type(obj).__name__}.")
    if key not in obj:
        raise KeyError(f"Missing required field: {key!r}")
    return obj[key]


def require_list(obj: Dict[str, Any], key: str) -> List[Any]:
    val = require_field(obj, key)
    if not isinstance(val, list):
        raise ValueError(f"{key!r} must be a list.")
    return val


def optional_list(obj: Dict[str, Any], key: str) -> List[Any]:
    """A window list that may be absent or ``null``; both mean empty."""
    val = obj.get(key)
    if val is None:
        return []
    if not isinstance(val, list):
        raise ValueError(f"{key!r} must be a list.")
    return val


def parse_fixed_window(raw: Dict[str, Any]) -> FixedWindow:
    return FixedWindow(
        fixed=to_decimal(require_field(raw, "fixed")),
        start=parse_timestamp(require_field(raw, "start")),
        end=parse_timestamp(require_field(raw, "end")),
    )


def parse_extra_window(raw: Dict[str, Any]) -> ExtraWindow:
    return ExtraWindow(
        extra=to_decimal(require_field(raw, "extra")),
        start=parse_timestamp(require_field(raw, "start")),
        end=parse_timestamp(require_field(raw, "end")),
    )


def parse_group_window(raw: Dict[str, Any]) -> GroupWindow:
    raw_start = require_field(raw, "start")
    raw_end = require_field(raw, "end")
    return GroupWindow(
        start=parse_timestamp(raw_start),
        end=parse_timestamp(raw_end),
        raw_start=raw_start,
        raw_end=raw_end,
    )


def parse_windows(body: Dict[str, Any]) -> Dict[str, list]:
    return {
        "fixed": [parse_fixed_window(r) for r in optional_list(body, "q")],
        "extra": [parse_extra_window(r) for r in optional_list(body, "p")],
        "groups": [parse_group_window(r) for r in optional_list(body, "k")],
    }


def parse_raw_expense(raw: Dict[str, Any], index: int) -> RawExpense:
    """
    Read one ``{"date": str, "amount": number}`` row.

    ``timestamp`` is accepted as an alias for ``date``.
    """
    if not isinstance(raw, dict):
        raise TypeError(f"Transaction #{index}: expected an object.")
    date_key = "timestamp" if "date" not in raw and "timestamp" in raw else "date"
    if date_key not in raw:
        raise ValueError(f"Transaction #{index}: missing 'date' field.")
    if "amount" not in raw:
        raise ValueError(f"Transaction #{index}: missing 'amount' field.")
    date = raw[date_key]
    if not isinstance(date, str):
        raise ValueError(f"Transaction #{index}: 'date' must be a string.")
    return RawExpense(timestamp=date, amount=to_decimal(raw["amount"]))


def parse_transaction(raw: Dict[str, Any], index: int) -> Transaction:
    """
    Read a client-supplied transaction, keeping its own ceiling / remanent
    when present and deriving them from ``amount`` otherwise.
    """
    expense = parse_raw_expense(raw, index)
    moment = parse_timestamp(expense.timestamp)
    amount = expense.amount
    ceiling = (
        to_decimal(raw["ceiling"]) if raw.get("ceiling") is not None else compute_ceiling(amount)
    )
    remanent = (
        to_decimal(raw["remanent"])
        if raw.get("remanent") is not None
        else compute_remanent(ceiling, amount)
    )
    return Transaction(
        moment=moment,
        date=format_timestamp(moment),
        amount=amount,
        ceiling=ceiling,
        remanent=remanent,
    )


def parse_profile(body: Dict[str, Any]) -> Profile:
    age = require_field(body, "age")
    if not isinstance(age, int) or isinstance(age, bool):
        raise ValueError(f"'age' must be an integer, got {type(age).__name__}.")
    if age < 0:
        raise ValueError("'age' must not be negative.")

    monthly_wage = to_decimal(require_field(body, "wage"))
    if monthly_wage < 0:
        raise ValueError("'wage' must not be negative.")

    inflation = to_decimal(require_field(body, "inflation"))
    if inflation <= -100:
        raise ValueError("'inflation' must be greater than -100.")

    return Profile(age=age, monthly_wage=monthly_wage, inflation_percent=inflation)
