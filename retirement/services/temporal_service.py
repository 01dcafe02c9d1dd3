"""
Temporal overlay resolver.

A single resolver serves both the ``transactions:filter`` route (which needs
per-transaction ``inKPeriod`` flags) and the returns pipeline (which needs
per-K remanent totals).

Processing order
----------------
1. Validity: a repeat of an already-accepted ``date`` is a duplicate
   whatever its amount; otherwise a negative amount is invalid.  Either way
   the transaction takes no further part.
2. Q rules: the matching Q period with the **latest start** replaces the
   remanent; equal starts favour the earliest Q in the input list.
3. P rules: every matching ``extra`` is added to the remanent.
4. K grouping: the resolved remanent is credited to every K range that
   contains the timestamp.

All ranges are closed on both ends.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from functools import reduce
from typing import List, Optional, Sequence, Set, Tuple

from retirement.logging_setup import get_logger
from retirement.models.schemas import (
    ExtraWindow,
    FixedWindow,
    GroupWindow,
    OverlayResolution,
    ResolvedTransaction,
    Transaction,
)
from retirement.utils.financial import ZERO
from retirement.utils.time_utils import is_within_range

logger = get_logger(__name__)

REASON_NEGATIVE = "negative amount"
REASON_DUPLICATE = "duplicate"


# ── Overlay steps ────────────────────────────────────────────────────────────

def best_fixed_window(dt: datetime, fixed: Sequence[FixedWindow]) -> Optional[FixedWindow]:
    """
    Return the Q window with the latest *start* that contains *dt*.

    ``max`` keeps the first of several equal keys, so among windows sharing
    the latest start the earliest in *fixed* wins.
    """
    matching = [w for w in fixed if is_within_range(dt, w.start, w.end)]
    if not matching:
        return None
    return max(matching, key=lambda w: w.start)


def apply_fixed_windows(remanent: Decimal, dt: datetime, fixed: Sequence[FixedWindow]) -> Decimal:
    """Replace *remanent* with the winning Q window's ``fixed`` value, if any."""
    winner = best_fixed_window(dt, fixed)
    return remanent if winner is None else winner.fixed


def apply_extra_windows(remanent: Decimal, dt: datetime, extra: Sequence[ExtraWindow]) -> Decimal:
    """Add ``extra`` from every P window whose range contains *dt*."""
    return reduce(
        lambda acc, w: acc + w.extra if is_within_range(dt, w.start, w.end) else acc,
        extra,
        remanent,
    )


def matching_groups(dt: datetime, groups: Sequence[GroupWindow]) -> Tuple[int, ...]:
    """Indices of the K windows that contain *dt*."""
    return tuple(i for i, g in enumerate(groups) if is_within_range(dt, g.start, g.end))


def resolve_remanent(
    txn: Transaction,
    fixed: Sequence[FixedWindow],
    extra: Sequence[ExtraWindow],
) -> Decimal:
    """Investable amount for *txn* after Q override then P additions."""
    remanent = apply_fixed_windows(txn.remanent, txn.moment, fixed)
    return apply_extra_windows(remanent, txn.moment, extra)


# ── Public API ───────────────────────────────────────────────────────────────

def resolve_overlays(
    transactions: Sequence[Transaction],
    fixed: Optional[Sequence[FixedWindow]] = None,
    extra: Optional[Sequence[ExtraWindow]] = None,
    groups: Optional[Sequence[GroupWindow]] = None,
) -> OverlayResolution:
    """
    Apply validity → Q → P → K to normalized transactions.

    Parameters
    ----------
    transactions:
        Canonical transactions in input order.
    fixed, extra, groups:
        Q, P and K window lists; ``None`` is treated as empty.

    Returns
    -------
    OverlayResolution
        Every transaction (valid ones with their resolved remanent and group
        memberships, invalid ones with a reason) plus one total per K window.
    """
    fixed = fixed or []
    extra = extra or []
    groups = groups or []

    resolved: List[ResolvedTransaction] = []
    totals: List[Decimal] = [ZERO] * len(groups)
    seen: Set[str] = set()

    for txn in transactions:
        if txn.date in seen:
            resolved.append(ResolvedTransaction(txn, txn.remanent, reason=REASON_DUPLICATE))
            continue

        if txn.amount < ZERO:
            resolved.append(ResolvedTransaction(txn, txn.remanent, reason=REASON_NEGATIVE))
            continue
        seen.add(txn.date)

        remanent = resolve_remanent(txn, fixed, extra)
        member_of = matching_groups(txn.moment, groups)
        for i in member_of:
            totals[i] += remanent

        resolved.append(ResolvedTransaction(txn, remanent, groups=member_of))

    logger.debug(
        "Resolved %d transactions against %d Q / %d P / %d K windows (%d accepted)",
        len(resolved), len(fixed), len(extra), len(groups), len(seen),
    )
    return OverlayResolution(transactions=resolved, group_totals=totals)
