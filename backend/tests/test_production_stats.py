import datetime as dt

import pytest

from app.services.forecasting.engine import ProductionRecord, StatsPeriod, get_production_stats, period_window

TODAY = dt.date(2024, 3, 31)

ENTRIES = [
    ProductionRecord(date=dt.date(2024, 2, 28), piles=1, racking_tables=1, modules=1),
    ProductionRecord(date=dt.date(2024, 2, 29), piles=10, racking_tables=2, modules=100),
    ProductionRecord(date=dt.date(2024, 3, 23), piles=20, racking_tables=3, modules=200),
    ProductionRecord(date=dt.date(2024, 3, 24), piles=30, racking_tables=4, modules=300),
    ProductionRecord(date=dt.date(2024, 3, 31), piles=40, racking_tables=5, modules=400),
    ProductionRecord(date=dt.date(2024, 4, 5), piles=50, racking_tables=6, modules=500),
]


@pytest.mark.parametrize(
    "period,expected",
    [
        (StatsPeriod.today, dt.date(2024, 3, 31)),
        (StatsPeriod.week, dt.date(2024, 3, 24)),
        # one calendar month back, clamped to the end of February
        (StatsPeriod.month, dt.date(2024, 2, 29)),
    ],
)
def test_period_window(period, expected):
    assert period_window(period, TODAY) == expected


def test_today_includes_future_entries():
    s = get_production_stats(ENTRIES, "today", TODAY)
    assert (s.piles, s.racking, s.modules) == (90, 11, 900)


def test_week():
    s = get_production_stats(ENTRIES, StatsPeriod.week, TODAY)
    assert (s.piles, s.racking, s.modules) == (120, 15, 1200)


def test_month():
    s = get_production_stats(ENTRIES, StatsPeriod.month, TODAY)
    assert (s.piles, s.racking, s.modules) == (150, 20, 1500)


def test_empty_entries():
    s = get_production_stats([], StatsPeriod.month, TODAY)
    assert (s.piles, s.racking, s.modules) == (0, 0, 0)


def test_unknown_period_rejected():
    with pytest.raises(ValueError):
        get_production_stats(ENTRIES, "year", TODAY)
