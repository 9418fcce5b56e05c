import datetime as dt
from dataclasses import asdict

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.logging import logger
from app.crud.production import list_entries, to_record
from app.crud.projects import get_project, to_plan
from app.crud.qc import count_open_issues, list_inspections
from app.db.models.project import Project
from app.schemas.reports import ReportType
from app.services.forecasting.engine import (
    ForecastResult,
    PercentComplete,
    CategoryCounts,
    ProductionRecord,
    ProgressWeights,
    StatsPeriod,
    aggregate_by_date,
    calculate_forecast,
    get_percent_complete,
    get_production_stats,
    period_window,
    round_half_up,
    sum_categories,
)

_REPORT_PERIODS = {
    "daily": StatsPeriod.today,
    "weekly": StatsPeriod.week,
    "monthly": StatsPeriod.month,
}


class ProjectNotFound(LookupError):
    def __init__(self, project_id: int):
        super().__init__(f"project {project_id} not found")
        self.project_id = project_id


def progress_weights() -> ProgressWeights:
    return ProgressWeights(
        piles=settings.PROGRESS_WEIGHT_PILES,
        racking=settings.PROGRESS_WEIGHT_RACKING,
        modules=settings.PROGRESS_WEIGHT_MODULES,
    )


def _load(db: Session, project_id: int) -> tuple[Project, list[ProductionRecord]]:
    p = get_project(db, project_id)
    if p is None:
        raise ProjectNotFound(project_id)
    records = [to_record(e) for e in list_entries(db, project_id, newest_first=False)]
    return p, records


def _forecast(p: Project, records: list[ProductionRecord], today: dt.date) -> ForecastResult:
    return calculate_forecast(
        to_plan(p),
        records,
        today,
        window=settings.ROLLING_WINDOW_ENTRIES,
        yellow_max_days=settings.HEALTH_YELLOW_MAX_DAYS,
    )


def _headline(f: ForecastResult) -> dict:
    return dict(
        projected_completion_date=f.projected_completion_date,
        days_variance=f.days_variance,
        schedule_health=f.schedule_health,
    )


def project_forecast(db: Session, project_id: int, today: dt.date) -> ForecastResult:
    p, records = _load(db, project_id)
    result = _forecast(p, records, today)
    logger.info(
        "forecast_computed",
        project_id=project_id,
        entries=len(records),
        days_variance=result.days_variance,
        health=result.schedule_health.value,
    )
    return result


def project_progress(db: Session, project_id: int) -> PercentComplete:
    p, records = _load(db, project_id)
    return get_percent_complete(to_plan(p), records, progress_weights())


def project_stats(db: Session, project_id: int, period: StatsPeriod | str, today: dt.date) -> CategoryCounts:
    _p, records = _load(db, project_id)
    return get_production_stats(records, period, today)


def project_summary(db: Session, project_id: int, today: dt.date) -> dict:
    p, records = _load(db, project_id)
    forecast = _forecast(p, records, today)
    return dict(
        project_id=p.id,
        name=p.name,
        as_of=today,
        progress=asdict(get_percent_complete(to_plan(p), records, progress_weights())),
        today=asdict(get_production_stats(records, StatsPeriod.today, today)),
        week=asdict(get_production_stats(records, StatsPeriod.week, today)),
        month=asdict(get_production_stats(records, StatsPeriod.month, today)),
        forecast=_headline(forecast),
    )


def report_period(
    report_type: ReportType,
    today: dt.date,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
) -> tuple[dt.date, dt.date]:
    if report_type == "custom":
        start = date_from or today
        end = date_to or today
    else:
        start = period_window(_REPORT_PERIODS[report_type], today)
        end = today
    if start > end:
        start, end = end, start
    return start, end


def project_report(
    db: Session,
    project_id: int,
    today: dt.date,
    report_type: ReportType = "daily",
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
) -> dict:
    p, all_records = _load(db, project_id)
    start, end = report_period(report_type, today, date_from, date_to)

    rows = list_entries(db, project_id, date_from=start, date_to=end, newest_first=False)
    period_records = [to_record(e) for e in rows]
    totals = sum_categories(period_records)
    days_worked = len(aggregate_by_date(period_records))
    divisor = days_worked or 1

    inspections = list_inspections(db, project_id, date_from=start, date_to=end)
    passed = sum(1 for i in inspections if i.status == "pass")
    failed = sum(1 for i in inspections if i.status == "fail")

    forecast = _forecast(p, all_records, today)
    logger.info(
        "report_generated",
        project_id=project_id,
        report_type=report_type,
        period_start=start.isoformat(),
        period_end=end.isoformat(),
        entries=len(rows),
    )
    return dict(
        generated_at=dt.datetime.now(dt.timezone.utc),
        project=dict(
            id=p.id,
            code=p.code,
            name=p.name,
            location=p.location,
            status=p.status,
            total_piles=p.total_piles,
            total_racking_tables=p.total_racking_tables,
            total_modules=p.total_modules,
            planned_start_date=p.planned_start_date,
            planned_end_date=p.planned_end_date,
        ),
        period=dict(type=report_type, start=start, end=end),
        production=dict(
            entries=[
                dict(
                    date=e.date,
                    piles=e.piles,
                    racking_tables=e.racking_tables,
                    modules=e.modules,
                    crew=e.crew,
                    entered_by=(e.user.full_name or e.user.login) if e.user else None,
                )
                for e in rows
            ],
            totals=asdict(totals),
            daily_average=dict(
                piles=round_half_up(totals.piles / divisor),
                racking=round_half_up(totals.racking / divisor),
                modules=round_half_up(totals.modules / divisor),
            ),
            days_worked=days_worked,
        ),
        qc=dict(
            total=len(inspections),
            passed=passed,
            failed=failed,
            pass_rate=round_half_up(passed / len(inspections) * 100) if inspections else 100,
            open_issues=count_open_issues(db, project_id),
        ),
        progress=asdict(get_percent_complete(to_plan(p), all_records, progress_weights())),
        installed_to_date=asdict(forecast.total_installed),
        forecast=_headline(forecast),
    )
