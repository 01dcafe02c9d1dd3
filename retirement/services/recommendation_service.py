"""
Recommendation service.

Turns two parallel projections (NPS vs index fund) and the investor's
profile into a risk profile, an allocation split and a short narrative.
"""

from __future__ import annotations

from decimal import Decimal
from typing import NamedTuple, Tuple

from retirement.models.schemas import Profile, ProjectionConfig, RateTrack, Recommendation
from retirement.utils.financial import resolve_investment_years, round2

HIGH_INCOME_THRESHOLD = Decimal("1500000")
HIGH_INCOME_NPS_BONUS = 10
MAX_NPS_PERCENT = 90


class AgeBand(NamedTuple):
    upper_bound: int
    index_percent: int
    nps_percent: int
    risk_profile: str
    reasoning: str


# First row with ``age < upper_bound`` applies; DEFAULT_BAND otherwise.
AGE_BANDS: Tuple[AgeBand, ...] = (
    AgeBand(
        35, 70, 30, "Aggressive",
        "At {age}, you have {years} years till retirement. "
        "Your long time horizon allows for higher equity exposure through "
        "Index Funds ({index_rate}% avg return). NPS provides stable {nps_rate}% returns "
        "with tax savings under Section 80CCD.",
    ),
    AgeBand(
        45, 50, 50, "Moderate",
        "At {age}, with {years} years till retirement, a balanced approach "
        "works best. Split equally between NPS (steady returns + tax deduction "
        "up to ₹2L) and Index Funds (higher growth potential). Adjust as you "
        "approach 50.",
    ),
    AgeBand(
        55, 30, 70, "Conservative",
        "At {age}, with {years} years till retirement, capital preservation "
        "becomes important. NPS offers stability and tax benefits. Keep some "
        "Index Fund exposure for inflation-beating returns.",
    ),
)

DEFAULT_BAND = AgeBand(
    0, 20, 80, "Very Conservative",
    "At {age}, you're close to retirement ({years} years of projected growth). "
    "Prioritize NPS for steady returns and maximum tax benefits. Minimal Index "
    "Fund allocation for liquidity.",
)


def _percent(rate: Decimal) -> str:
    return f"{rate * 100:.2f}"


def select_band(age: int) -> AgeBand:
    return next((band for band in AGE_BANDS if age < band.upper_bound), DEFAULT_BAND)


def recommend(
    profile: Profile,
    nps_effective_gain: Decimal,
    index_effective_gain: Decimal,
    config: ProjectionConfig,
    nps_track: RateTrack,
    index_track: RateTrack,
) -> Recommendation:
    """
    Build a :class:`~retirement.models.schemas.Recommendation`.

    Rates quoted in the reasoning are taken from *nps_track* and *index_track*.

    NPS is recommended only when its effective gain (profit + tax benefit)
    is strictly greater than the index fund's; ties go to the index fund.
    """
    band = select_band(profile.age)
    years = resolve_investment_years(profile.age, config)

    nps_percent = band.nps_percent
    index_percent = band.index_percent
    reasoning = band.reasoning.format(
        age=profile.age,
        years=years,
        nps_rate=_percent(nps_track.rate),
        index_rate=_percent(index_track.rate),
    )

    if profile.annual_income > HIGH_INCOME_THRESHOLD:
        nps_percent = min(nps_percent + HIGH_INCOME_NPS_BONUS, MAX_NPS_PERCENT)
        index_percent = 100 - nps_percent
        reasoning += (
            " Your income is in the 30% tax bracket - NPS tax deduction is highly valuable."
        )

    nps_gain = round2(nps_effective_gain)
    index_gain = round2(index_effective_gain)
    if nps_effective_gain > index_effective_gain:
        narrative = (
            f"NPS is more beneficial for your profile (effective gain: ₹{nps_gain} "
            f"vs ₹{index_gain}). The tax benefit makes NPS the winner despite "
            "lower market returns."
        )
    else:
        narrative = (
            f"Index Fund generates higher returns for your profile (₹{index_gain} "
            f"vs ₹{nps_gain}). However, consider NPS allocation for tax savings."
        )

    return Recommendation(
        narrative=narrative,
        risk_profile=band.risk_profile,
        market_percent=index_percent,
        tax_advantaged_percent=nps_percent,
        reasoning=reasoning,
    )
