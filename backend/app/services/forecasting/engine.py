"""Schedule forecasting for solar construction projects.

Everything here is a pure function of its arguments: a project plan, the
production entries reported so far and the reference date ``today``.
Modules are the governing quantity for the progress curves and the
completion projection.
"""
import datetime as dt
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence

from dateutil.relativedelta import relativedelta

ROLLING_WINDOW_ENTRIES = 7
HEALTH_YELLOW_MAX_DAYS = 7


class ScheduleHealth(str, Enum):
    green = "green"
    yellow = "yellow"
    red = "red"


class StatsPeriod(str, Enum):
    today = "today"
    week = "week"
    month = "month"


@dataclass(frozen=True)
class ProgressWeights:
    piles: float = 0.15
    racking: float = 0.25
    modules: float = 0.60

    def __post_init__(self):
        if abs(self.piles + self.racking + self.modules - 1.0) > 1e-9:
            raise ValueError("progress weights must sum to 1.0")


DEFAULT_WEIGHTS = ProgressWeights()


@dataclass(frozen=True)
class ProjectPlan:
    total_piles: int
    total_racking_tables: int
    total_modules: int
    planned_start_date: dt.date
    planned_end_date: dt.date
    planned_piles_per_day: float = 0.0
    planned_racking_per_day: float = 0.0
    planned_modules_per_day: float = 0.0


@dataclass(frozen=True)
class ProductionRecord:
    date: dt.date
    piles: int = 0
    racking_tables: int = 0
    modules: int = 0

    def __post_init__(self):
        # time of day never matters, only the calendar day
        if isinstance(self.date, dt.datetime):
            object.__setattr__(self, "date", self.date.date())


@dataclass(frozen=True)
class CategoryCounts:
    piles: int = 0
    racking: int = 0
    modules: int = 0


@dataclass(frozen=True)
class CategoryRates:
    piles: float = 0.0
    racking: float = 0.0
    modules: float = 0.0


@dataclass(frozen=True)
class PercentComplete:
    piles: float = 0.0
    racking: float = 0.0
    modules: float = 0.0
    overall: float = 0.0


@dataclass(frozen=True)
class ForecastResult:
    planned_progress: list[float]
    actual_progress: list[float]
    dates: list[str]
    projected_completion_date: dt.date | None
    days_variance: int
    schedule_health: ScheduleHealth
    remaining_work: CategoryCounts
    average_daily_production: CategoryRates
    total_days: int = 1
    days_elapsed: int = 0
    total_installed: CategoryCounts = field(default_factory=CategoryCounts)


def _today(today: dt.date | None) -> dt.date:
    if today is None:
        return dt.date.today()
    if isinstance(today, dt.datetime):
        return today.date()
    return today


def _round1(v: float) -> float:
    # half-up, 33.333 -> 33.3, 12.25 -> 12.3
    return math.floor(v * 10 + 0.5) / 10


def round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def _pct(done: float, target: float) -> float:
    return (done / target * 100.0) if target > 0 else 0.0


def sum_categories(entries: Iterable[ProductionRecord]) -> CategoryCounts:
    piles = racking = modules = 0
    for e in entries:
        piles += e.piles
        racking += e.racking_tables
        modules += e.modules
    return CategoryCounts(piles=piles, racking=racking, modules=modules)


def aggregate_by_date(entries: Iterable[ProductionRecord]) -> dict[dt.date, CategoryCounts]:
    """Group entries from several crews into one total per calendar day, ordered by date."""
    out: dict[dt.date, list[ProductionRecord]] = {}
    for e in sorted(entries, key=lambda e: e.date):
        out.setdefault(e.date, []).append(e)
    return {d: sum_categories(rows) for d, rows in out.items()}


def period_window(period: StatsPeriod | str, today: dt.date | None = None) -> dt.date:
    today = _today(today)
    period = StatsPeriod(period)
    if period == StatsPeriod.today:
        return today
    if period == StatsPeriod.week:
        return today - dt.timedelta(days=7)
    return today - relativedelta(months=1)


def classify_schedule_health(days_variance: int, yellow_max_days: int = HEALTH_YELLOW_MAX_DAYS) -> ScheduleHealth:
    if days_variance <= 0:
        return ScheduleHealth.green
    if days_variance <= yellow_max_days:
        return ScheduleHealth.yellow
    return ScheduleHealth.red


def _average_daily(
    plan: ProjectPlan, sorted_entries: Sequence[ProductionRecord], window: int
) -> CategoryRates:
    recent = list(sorted_entries[-window:]) if window > 0 else []
    if not recent:
        return CategoryRates(
            piles=float(plan.planned_piles_per_day),
            racking=float(plan.planned_racking_per_day),
            modules=float(plan.planned_modules_per_day),
        )
    totals = sum_categories(recent)
    n = len(recent)
    return CategoryRates(piles=totals.piles / n, racking=totals.racking / n, modules=totals.modules / n)


def calculate_forecast(
    plan: ProjectPlan,
    entries: Iterable[ProductionRecord],
    today: dt.date | None = None,
    *,
    window: int = ROLLING_WINDOW_ENTRIES,
    yellow_max_days: int = HEALTH_YELLOW_MAX_DAYS,
) -> ForecastResult:
    today = _today(today)
    start = plan.planned_start_date
    end = plan.planned_end_date

    total_days = max(1, (end - start).days)
    days_elapsed = max(0, (today - start).days)

    # sorted() is stable, same-day entries keep their input order
    sorted_entries = sorted(entries, key=lambda e: e.date)

    modules_by_day: dict[dt.date, int] = {}
    for e in sorted_entries:
        modules_by_day[e.date] = modules_by_day.get(e.date, 0) + e.modules

    planned_progress: list[float] = []
    actual_progress: list[float] = []
    dates: list[str] = []
    cumulative_modules = 0
    for i in range(min(days_elapsed, total_days) + 1):
        d = start + dt.timedelta(days=i)
        cumulative_modules += modules_by_day.get(d, 0)
        actual = _pct(cumulative_modules, plan.total_modules)
        actual_progress.append(min(100.0, max(0.0, actual)))
        planned_progress.append(i / total_days * 100.0)
        dates.append(d.isoformat())

    installed = sum_categories(sorted_entries)
    remaining = CategoryCounts(
        piles=max(0, plan.total_piles - installed.piles),
        racking=max(0, plan.total_racking_tables - installed.racking),
        modules=max(0, plan.total_modules - installed.modules),
    )
    avg = _average_daily(plan, sorted_entries, window)

    projected: dt.date | None = None
    days_variance = 0
    if avg.modules > 0 and remaining.modules > 0:
        days_needed = math.ceil(remaining.modules / avg.modules)
        projected = today + dt.timedelta(days=days_needed)
        days_variance = (projected - end).days
    elif remaining.modules == 0:
        projected = today
        days_variance = (today - end).days

    return ForecastResult(
        planned_progress=planned_progress,
        actual_progress=actual_progress,
        dates=dates,
        projected_completion_date=projected,
        days_variance=days_variance,
        schedule_health=classify_schedule_health(days_variance, yellow_max_days),
        remaining_work=remaining,
        average_daily_production=avg,
        total_days=total_days,
        days_elapsed=days_elapsed,
        total_installed=installed,
    )


def get_percent_complete(
    plan: ProjectPlan,
    entries: Iterable[ProductionRecord],
    weights: ProgressWeights = DEFAULT_WEIGHTS,
) -> PercentComplete:
    totals = sum_categories(entries)
    piles = _pct(totals.piles, plan.total_piles)
    racking = _pct(totals.racking, plan.total_racking_tables)
    modules = _pct(totals.modules, plan.total_modules)
    overall = piles * weights.piles + racking * weights.racking + modules * weights.modules
    return PercentComplete(
        piles=_round1(piles),
        racking=_round1(racking),
        modules=_round1(modules),
        overall=_round1(overall),
    )


def get_production_stats(
    entries: Iterable[ProductionRecord],
    period: StatsPeriod | str,
    today: dt.date | None = None,
) -> CategoryCounts:
    window_start = period_window(period, today)
    return sum_categories(e for e in entries if e.date >= window_start)
