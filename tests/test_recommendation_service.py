from decimal import Decimal

import pytest

from retirement.models.schemas import Profile, ProjectionConfig, RateTrack
from retirement.services.recommendation_service import recommend, select_band

CONFIG = ProjectionConfig()
NPS = RateTrack(name="nps", rate=Decimal("0.0711"), tax_advantaged=True)
INDEX = RateTrack(name="index", rate=Decimal("0.1449"))


def _profile(age, wage):
    return Profile(age=age, monthly_wage=Decimal(wage), inflation_percent=Decimal("5.5"))


@pytest.mark.parametrize(
    "age, label, index_pct, nps_pct",
    [
        (20, "Aggressive", 70, 30),
        (34, "Aggressive", 70, 30),
        (35, "Moderate", 50, 50),
        (44, "Moderate", 50, 50),
        (45, "Conservative", 30, 70),
        (54, "Conservative", 30, 70),
        (55, "Very Conservative", 20, 80),
        (75, "Very Conservative", 20, 80),
    ],
)
def test_age_bands(age, label, index_pct, nps_pct):
    rec = recommend(_profile(age, "50000"), Decimal("1"), Decimal("2"), CONFIG, NPS, INDEX)

    assert rec.risk_profile == label
    assert rec.market_percent == index_pct
    assert rec.tax_advantaged_percent == nps_pct


@pytest.mark.parametrize(
    "age, nps_pct",
    [(30, 40), (40, 60), (50, 80), (58, 90), (62, 90)],
)
def test_high_income_tilts_towards_nps(age, nps_pct):
    rec = recommend(_profile(age, "200000"), Decimal("1"), Decimal("2"), CONFIG, NPS, INDEX)

    assert rec.tax_advantaged_percent == nps_pct
    assert rec.market_percent == 100 - nps_pct
    assert "30% tax bracket" in rec.reasoning


def test_income_exactly_at_threshold_is_not_adjusted():
    rec = recommend(_profile(30, "125000"), Decimal("1"), Decimal("2"), CONFIG, NPS, INDEX)

    assert rec.tax_advantaged_percent == 30


@pytest.mark.parametrize("age", range(0, 100, 7))
@pytest.mark.parametrize("wage", ["1000", "125000", "125001", "1000000"])
def test_split_always_sums_to_hundred(age, wage):
    rec = recommend(_profile(age, wage), Decimal("0"), Decimal("0"), CONFIG, NPS, INDEX)

    assert rec.market_percent + rec.tax_advantaged_percent == 100


def test_nps_wins_only_when_strictly_greater():
    profile = _profile(40, "50000")

    nps_wins = recommend(profile, Decimal("100.005"), Decimal("100"), CONFIG, NPS, INDEX)
    tie = recommend(profile, Decimal("100"), Decimal("100"), CONFIG, NPS, INDEX)

    assert nps_wins.narrative.startswith("NPS is more beneficial")
    assert "₹100.01 vs ₹100.00" in nps_wins.narrative
    assert tie.narrative.startswith("Index Fund generates higher returns")


def test_reasoning_mentions_age_and_years():
    rec = recommend(_profile(58, "50000"), Decimal("0"), Decimal("1"), CONFIG, NPS, INDEX)

    assert "At 58" in rec.reasoning
    assert "2 years" in rec.reasoning


def test_select_band_falls_back_to_default():
    assert select_band(99).risk_profile == "Very Conservative"


def test_reasoning_quotes_track_rates():
    default = recommend(_profile(29, "50000"), Decimal("0"), Decimal("1"), CONFIG, NPS, INDEX)
    custom = recommend(
        _profile(29, "50000"), Decimal("0"), Decimal("1"), CONFIG,
        RateTrack(name="nps", rate=Decimal("0.08"), tax_advantaged=True),
        RateTrack(name="index", rate=Decimal("0.12")),
    )

    assert "Index Funds (14.49% avg return)" in default.reasoning
    assert "stable 7.11% returns" in default.reasoning
    assert "Index Funds (12.00% avg return)" in custom.reasoning
    assert "stable 8.00% returns" in custom.reasoning
