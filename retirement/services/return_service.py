"""
Returns calculation service.

Implements compound-growth projections for two investment vehicles:

* **NPS** (National Pension System) – 7.11 % p.a.; includes tax-benefit.
* **Index fund**                     – 14.49 % p.a.; tax-benefit = 0.

Pipeline per call
-----------------
1. Normalize every ``{"date", "amount"}`` row (ceiling / remanent).
2. Resolve overlays: validity, Q override, P extras, K grouping.
3. Track totalTransactionAmount and totalCeiling across valid transactions.
4. Compound-grow each K-bucket sum, deflate by inflation, compute tax benefit.

Rates and the retirement horizon are passed in as :class:`RateTrack` and
:class:`ProjectionConfig` values; :func:`default_tracks` builds them from
:mod:`retirement.config`.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from retirement.config import settings
from retirement.logging_setup import get_logger
from retirement.models.schemas import (
    ComparisonResult,
    ExtraWindow,
    FixedWindow,
    GroupWindow,
    Profile,
    ProjectionConfig,
    RateTrack,
    RawExpense,
    ReturnsResult,
    SavingsBucket,
)
from retirement.services.recommendation_service import recommend
from retirement.services.temporal_service import resolve_overlays
from retirement.services.transaction_service import normalize_all
from retirement.utils.financial import (
    ZERO,
    compute_tax_benefit,
    project_growth,
    round2,
)

logger = get_logger(__name__)


def default_tracks() -> Dict[str, RateTrack]:
    return {
        "nps": RateTrack(name="nps", rate=settings.NPS_RATE, tax_advantaged=True),
        "index": RateTrack(name="index", rate=settings.INDEX_RATE),
    }


def default_projection_config() -> ProjectionConfig:
    return ProjectionConfig(
        retirement_age=settings.RETIREMENT_AGE,
        minimum_years=settings.MINIMUM_INVESTMENT_YEARS,
    )


def _compute_savings(
    k: GroupWindow,
    invested: Decimal,
    profile: Profile,
    track: RateTrack,
    config: ProjectionConfig,
) -> SavingsBucket:
    """
    Build one :class:`~retirement.models.schemas.SavingsBucket` entry.

    profit = inflation_adjusted(future_value) − principal
    """
    _, _, profit = project_growth(
        invested, profile.age, profile.inflation_percent, track, config
    )

    tax_benefit = ZERO
    if track.tax_advantaged:
        tax_benefit = compute_tax_benefit(invested, profile.annual_income)

    return SavingsBucket(
        start=k.raw_start,
        end=k.raw_end,
        amount=round2(invested),
        profit=profit,
        tax_benefit=tax_benefit,
    )


def calculate_returns(
    profile: Profile,
    track: RateTrack,
    expenses: Sequence[RawExpense],
    fixed: Optional[Sequence[FixedWindow]] = None,
    extra: Optional[Sequence[ExtraWindow]] = None,
    groups: Optional[Sequence[GroupWindow]] = None,
    config: Optional[ProjectionConfig] = None,
) -> ReturnsResult:
    """
    Full returns projection pipeline for one rate track.

    Parameters
    ----------
    profile:
        Age, **monthly** wage and inflation **percentage** of the investor.
    track:
        Rate track to project on; tax benefit applies iff ``tax_advantaged``.
    expenses:
        Raw ``(timestamp, amount)`` rows.  Negative amounts and duplicate
        timestamps are excluded from every total.
    fixed, extra, groups:
        Q, P and K windows; ``None`` is treated as empty.
    config:
        Retirement horizon; defaults to the configured values.

    Returns
    -------
    ReturnsResult
        Aggregate totals and one savings bucket per K window, in input order.

    Raises
    ------
    MalformedTimestamp
        If any expense timestamp cannot be parsed.
    """
    config = config or default_projection_config()
    groups = list(groups or [])

    transactions = normalize_all(expenses)
    resolution = resolve_overlays(transactions, fixed, extra, groups)

    valid = resolution.valid
    total_amount = sum((r.transaction.amount for r in valid), ZERO)
    total_ceiling = sum((r.transaction.ceiling for r in valid), ZERO)

    savings_by_dates: List[SavingsBucket] = [
        _compute_savings(k, invested, profile, track, config)
        for k, invested in zip(groups, resolution.group_totals)
    ]

    logger.debug(
        "Projected %d buckets on %s track for age %d",
        len(savings_by_dates), track.name, profile.age,
    )

    return ReturnsResult(
        total_transaction_amount=round2(total_amount),
        total_ceiling=round2(total_ceiling),
        savings_by_dates=savings_by_dates,
    )


def compare_returns(
    profile: Profile,
    expenses: Sequence[RawExpense],
    fixed: Optional[Sequence[FixedWindow]] = None,
    extra: Optional[Sequence[ExtraWindow]] = None,
    groups: Optional[Sequence[GroupWindow]] = None,
    tracks: Optional[Tuple[RateTrack, RateTrack]] = None,
    config: Optional[ProjectionConfig] = None,
) -> ComparisonResult:
    """
    Project the same inputs on the NPS and index tracks and recommend a split.

    *tracks* is ``(tax_advantaged_track, market_track)``.
    """
    config = config or default_projection_config()
    if tracks is None:
        defaults = default_tracks()
        tracks = (defaults["nps"], defaults["index"])
    nps_track, index_track = tracks

    nps = calculate_returns(profile, nps_track, expenses, fixed, extra, groups, config)
    index = calculate_returns(profile, index_track, expenses, fixed, extra, groups, config)

    nps_gain = nps.total_profit + nps.total_tax_benefit
    index_gain = index.total_profit

    return ComparisonResult(
        nps=nps,
        index=index,
        nps_effective_gain=nps_gain,
        index_effective_gain=index_gain,
        recommendation=recommend(profile, nps_gain, index_gain, config, nps_track, index_track),
    )
