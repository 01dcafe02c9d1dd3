from datetime import datetime
from decimal import Decimal

from retirement.models.schemas import (
    FixedWindow,
    GroupWindow,
    Profile,
    ProjectionConfig,
    RateTrack,
    RawExpense,
)
from retirement.services.return_service import (
    calculate_returns,
    compare_returns,
    default_tracks,
)

PROFILE = Profile(age=58, monthly_wage=Decimal("100000"), inflation_percent=Decimal("0"))
YEAR_2024 = GroupWindow(
    datetime(2024, 1, 1), datetime(2024, 12, 31, 23, 59, 59),
    "2024-01-01 00:00:00", "2024-12-31 23:59:59",
)
EXPENSES = [
    RawExpense("2024-03-15 10:30:00", Decimal("150.75")),
    RawExpense("2024-03-15 10:30:00", Decimal("10")),
    RawExpense("2024-04-01 09:00:00", Decimal("-50")),
    RawExpense("2024-05-01 09:00:00", Decimal("449")),
]


def test_default_tracks():
    tracks = default_tracks()

    assert tracks["nps"].rate == Decimal("0.0711")
    assert tracks["nps"].tax_advantaged
    assert tracks["index"].rate == Decimal("0.1449")
    assert not tracks["index"].tax_advantaged


def test_calculate_returns_index_track():
    result = calculate_returns(PROFILE, default_tracks()["index"], EXPENSES, groups=[YEAR_2024])

    assert result.total_transaction_amount == Decimal("599.75")
    assert result.total_ceiling == Decimal("700")

    bucket = result.savings_by_dates[0]
    assert bucket.start == "2024-01-01 00:00:00"
    assert bucket.amount == Decimal("100.25")
    # 100.25 * (1.1449^2 - 1)
    assert bucket.profit == Decimal("31.16")
    assert bucket.tax_benefit == Decimal("0")


def test_calculate_returns_fixed_override_sets_bucket_amount():
    fixed = [FixedWindow(Decimal("100"), datetime(2024, 3, 1), datetime(2024, 3, 31))]

    result = calculate_returns(
        PROFILE, default_tracks()["nps"], EXPENSES[:1], fixed=fixed, groups=[YEAR_2024]
    )

    bucket = result.savings_by_dates[0]
    assert bucket.amount == Decimal("100.00")
    assert bucket.tax_benefit == Decimal("15.00")


def test_calculate_returns_custom_track_and_horizon():
    track = RateTrack(name="bond", rate=Decimal("0.10"))
    config = ProjectionConfig(retirement_age=59, minimum_years=1)

    result = calculate_returns(PROFILE, track, EXPENSES, groups=[YEAR_2024], config=config)

    # one year at 10%
    assert result.savings_by_dates[0].profit == Decimal("10.03")


def test_calculate_returns_without_groups():
    result = calculate_returns(PROFILE, default_tracks()["nps"], EXPENSES)

    assert result.savings_by_dates == []
    assert result.total_ceiling == Decimal("700")


def test_compare_returns():
    result = compare_returns(PROFILE, EXPENSES, groups=[YEAR_2024])

    assert result.nps_effective_gain == (
        result.nps.total_profit + result.nps.total_tax_benefit
    )
    assert result.index_effective_gain == result.index.total_profit
    assert result.index_effective_gain > result.nps_effective_gain
    assert result.recommendation.risk_profile == "Very Conservative"
    assert result.recommendation.narrative.startswith("Index Fund")

    data = result.to_dict()
    assert data["totalInvestable"] == 100.25
    assert data["recommendation"]["marketPercent"] == 20
