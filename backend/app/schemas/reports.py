import datetime as dt
from typing import Literal
from pydantic import BaseModel, ConfigDict

from app.services.forecasting.engine import ScheduleHealth

ReportType = Literal["daily", "weekly", "monthly", "custom"]

class CategoryCountsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    piles: int
    racking: int
    modules: int

class CategoryRatesOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    piles: float
    racking: float
    modules: float

class PercentCompleteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    piles: float
    racking: float
    modules: float
    overall: float

class ForecastOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    planned_progress: list[float]
    actual_progress: list[float]
    dates: list[str]
    projected_completion_date: dt.date | None
    days_variance: int
    schedule_health: ScheduleHealth
    remaining_work: CategoryCountsOut
    average_daily_production: CategoryRatesOut
    total_days: int
    days_elapsed: int
    total_installed: CategoryCountsOut

class ForecastHeadline(BaseModel):
    projected_completion_date: dt.date | None
    days_variance: int
    schedule_health: ScheduleHealth

class ProjectSummaryOut(BaseModel):
    project_id: int
    name: str
    as_of: dt.date
    progress: PercentCompleteOut
    today: CategoryCountsOut
    week: CategoryCountsOut
    month: CategoryCountsOut
    forecast: ForecastHeadline

class ReportEntryRow(BaseModel):
    date: dt.date
    piles: int
    racking_tables: int
    modules: int
    crew: str | None = None
    entered_by: str | None = None

class ReportProject(BaseModel):
    id: int
    code: str
    name: str
    location: str | None = None
    status: str
    total_piles: int
    total_racking_tables: int
    total_modules: int
    planned_start_date: dt.date
    planned_end_date: dt.date

class ReportPeriod(BaseModel):
    type: ReportType
    start: dt.date
    end: dt.date

class ReportProduction(BaseModel):
    entries: list[ReportEntryRow]
    totals: CategoryCountsOut
    daily_average: CategoryCountsOut
    days_worked: int

class ReportQC(BaseModel):
    total: int
    passed: int
    failed: int
    pass_rate: int
    open_issues: int

class ProjectReportOut(BaseModel):
    generated_at: dt.datetime
    project: ReportProject
    period: ReportPeriod
    production: ReportProduction
    qc: ReportQC
    progress: PercentCompleteOut
    installed_to_date: CategoryCountsOut
    forecast: ForecastHeadline
