import csv
import datetime as dt
import io
from pathlib import Path
import pandas as pd
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from reportlab.lib.units import mm

from app.core.config import settings
from app.schemas.reports import ProjectReportOut, ProjectSummaryOut
from app.services.forecasting.engine import ForecastResult, round_half_up

_HEALTH_LABELS = {"green": "On Track", "yellow": "Minor Delay", "red": "At Risk"}


def _pct(done: int, total: int) -> str:
    return f"{round_half_up(done / total * 100) if total > 0 else 0}%"


def export_report_csv(report: ProjectReportOut) -> str:
    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\n")
    p = report.project
    totals = report.installed_to_date

    w.writerow([f"Solar Construction Report - {p.name}"])
    w.writerow([f"Generated: {report.generated_at.isoformat()}"])
    w.writerow([f"Period: {report.period.start.isoformat()} to {report.period.end.isoformat()}"])
    w.writerow([])

    w.writerow(["PROJECT SUMMARY"])
    w.writerow(["Metric", "Value"])
    w.writerow(["Total Piles Planned", p.total_piles])
    w.writerow(["Total Piles Installed", totals.piles])
    w.writerow(["Piles Progress", _pct(totals.piles, p.total_piles)])
    w.writerow(["Total Racking Planned", p.total_racking_tables])
    w.writerow(["Total Racking Installed", totals.racking])
    w.writerow(["Racking Progress", _pct(totals.racking, p.total_racking_tables)])
    w.writerow(["Total Modules Planned", p.total_modules])
    w.writerow(["Total Modules Installed", totals.modules])
    w.writerow(["Modules Progress", _pct(totals.modules, p.total_modules)])
    w.writerow(["Overall Progress", f"{report.progress.overall}%"])
    w.writerow([])

    f = report.forecast
    w.writerow(["SCHEDULE FORECAST"])
    w.writerow(["Planned End", p.planned_end_date.isoformat()])
    w.writerow(["Projected Completion", f.projected_completion_date.isoformat() if f.projected_completion_date else "N/A"])
    w.writerow(["Days Variance", f.days_variance])
    w.writerow(["Schedule Health", _HEALTH_LABELS[f.schedule_health.value]])
    w.writerow([])

    qc = report.qc
    w.writerow(["QC SUMMARY"])
    w.writerow(["Total Inspections", qc.total])
    w.writerow(["Passed", qc.passed])
    w.writerow(["Failed", qc.failed])
    w.writerow(["Pass Rate", f"{qc.pass_rate}%"])
    w.writerow(["Open Issues", qc.open_issues])
    w.writerow([])

    w.writerow(["DAILY PRODUCTION"])
    w.writerow(["Date", "Piles", "Racking", "Modules", "Crew", "Entered By"])
    for e in report.production.entries:
        w.writerow([e.date.isoformat(), e.piles, e.racking_tables, e.modules, e.crew or "N/A", e.entered_by or "N/A"])
    t = report.production.totals
    w.writerow(["Total", t.piles, t.racking, t.modules, "", ""])
    return buf.getvalue()


def export_forecast_xlsx(forecast: ForecastResult, out_path: Path):
    df = pd.DataFrame(
        {
            "date": forecast.dates,
            "planned": forecast.planned_progress,
            "actual": forecast.actual_progress,
        }
    )
    df["variance"] = df["actual"] - df["planned"]
    headline = pd.DataFrame(
        [
            ("total_days", forecast.total_days),
            ("days_elapsed", forecast.days_elapsed),
            ("projected_completion_date", forecast.projected_completion_date.isoformat() if forecast.projected_completion_date else ""),
            ("days_variance", forecast.days_variance),
            ("schedule_health", forecast.schedule_health.value),
            ("remaining_modules", forecast.remaining_work.modules),
            ("avg_daily_modules", forecast.average_daily_production.modules),
        ],
        columns=["metric", "value"],
    )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(out_path, engine="xlsxwriter") as w:
        df.to_excel(w, index=False, sheet_name="progress_curve")
        headline.to_excel(w, index=False, sheet_name="forecast")
    return out_path


def export_summary_pdf(summary: ProjectSummaryOut, out_path: Path):
    out_path.parent.mkdir(parents=True, exist_ok=True)
    c = canvas.Canvas(str(out_path), pagesize=A4)
    width, height = A4
    y = height - 20*mm
    c.setFont("Helvetica-Bold", 14)
    c.drawString(20*mm, y, f"Schedule Summary - {summary.name}")
    y -= 10*mm
    c.setFont("Helvetica", 11)
    pr = summary.progress
    fc = summary.forecast
    lines = [
        f"Project ID: {summary.project_id}",
        f"As of: {summary.as_of.isoformat()}",
        f"Piles: {pr.piles:.1f} %   Racking: {pr.racking:.1f} %   Modules: {pr.modules:.1f} %",
        f"Overall: {pr.overall:.1f} %",
        f"Today: {summary.today.piles} piles, {summary.today.racking} tables, {summary.today.modules} modules",
        f"Last 7 days: {summary.week.piles} piles, {summary.week.racking} tables, {summary.week.modules} modules",
        f"Last month: {summary.month.piles} piles, {summary.month.racking} tables, {summary.month.modules} modules",
        f"Projected completion: {fc.projected_completion_date.isoformat()}" if fc.projected_completion_date else "Projected completion: -",
        f"Days variance: {fc.days_variance:+d}",
        f"Schedule health: {_HEALTH_LABELS[fc.schedule_health.value]}",
    ]
    for ln in lines:
        c.drawString(20*mm, y, ln)
        y -= 7*mm
    c.showPage()
    c.save()
    return out_path

def default_export_path(prefix: str, ext: str) -> Path:
    ts = dt.datetime.now(dt.timezone.utc).strftime("%Y%m%d_%H%M%S")
    return Path(settings.EXPORT_DIR) / f"{prefix}_{ts}.{ext}"
