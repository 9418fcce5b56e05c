import datetime as dt

import pandas as pd
import pytest

from app.schemas.reports import ProjectReportOut, ProjectSummaryOut
from app.services.exports.exporter import export_forecast_xlsx, export_report_csv, export_summary_pdf
from app.services.forecasting.engine import ProductionRecord, calculate_forecast


def _report(total_piles=200):
    return ProjectReportOut.model_validate(
        dict(
            generated_at=dt.datetime(2024, 1, 6, 12, 0, tzinfo=dt.timezone.utc),
            project=dict(
                id=1,
                code="SF-1",
                name="Sunfield",
                location="Kern County, CA",
                status="active",
                total_piles=total_piles,
                total_racking_tables=100,
                total_modules=1000,
                planned_start_date=dt.date(2024, 1, 1),
                planned_end_date=dt.date(2024, 1, 11),
            ),
            period=dict(type="weekly", start=dt.date(2023, 12, 30), end=dt.date(2024, 1, 6)),
            production=dict(
                entries=[
                    dict(date=dt.date(2024, 1, 5), piles=30, racking_tables=10, modules=200, crew="Crew A", entered_by="Ana"),
                    dict(date=dt.date(2024, 1, 6), piles=20, racking_tables=5, modules=300),
                ],
                totals=dict(piles=50, racking=15, modules=500),
                daily_average=dict(piles=25, racking=8, modules=250),
                days_worked=2,
            ),
            qc=dict(total=4, passed=3, failed=1, pass_rate=75, open_issues=2),
            progress=dict(piles=25.0, racking=15.0, modules=50.0, overall=37.5),
            installed_to_date=dict(piles=50, racking=15, modules=500),
            forecast=dict(projected_completion_date=dt.date(2024, 1, 8), days_variance=-3, schedule_health="green"),
        )
    )


def test_report_csv_sections():
    lines = export_report_csv(_report()).splitlines()

    assert lines[0] == "Solar Construction Report - Sunfield"
    assert lines[2] == "Period: 2023-12-30 to 2024-01-06"
    assert "PROJECT SUMMARY" in lines
    assert "Piles Progress,25%" in lines
    assert "Modules Progress,50%" in lines
    assert "Projected Completion,2024-01-08" in lines
    assert "Schedule Health,On Track" in lines

    qc = lines.index("QC SUMMARY")
    assert lines[qc + 1 : qc + 6] == [
        "Total Inspections,4",
        "Passed,3",
        "Failed,1",
        "Pass Rate,75%",
        "Open Issues,2",
    ]

    daily = lines.index("DAILY PRODUCTION")
    assert lines[daily + 1] == "Date,Piles,Racking,Modules,Crew,Entered By"
    assert lines[daily + 2] == "2024-01-05,30,10,200,Crew A,Ana"
    assert lines[daily + 3] == "2024-01-06,20,5,300,N/A,N/A"
    assert lines[daily + 4] == "Total,50,15,500,,"


def test_report_csv_zero_target():
    lines = export_report_csv(_report(total_piles=0)).splitlines()
    assert "Piles Progress,0%" in lines


def test_report_csv_progress_rounds_half_up():
    # 50 of 400 piles is 12.5%
    lines = export_report_csv(_report(total_piles=400)).splitlines()
    assert "Piles Progress,13%" in lines


def test_forecast_xlsx(tmp_path, plan):
    entries = [ProductionRecord(date=dt.date(2024, 1, 3), modules=250)]
    forecast = calculate_forecast(plan, entries, today=dt.date(2024, 1, 5))
    out = export_forecast_xlsx(forecast, tmp_path / "exports" / "forecast.xlsx")

    curve = pd.read_excel(out, sheet_name="progress_curve")
    assert list(curve.columns) == ["date", "planned", "actual", "variance"]
    assert len(curve) == 5
    assert curve.loc[2, "actual"] == 25.0
    assert curve.loc[4, "planned"] == pytest.approx(40.0)
    assert curve.loc[4, "variance"] == pytest.approx(-15.0)

    headline = pd.read_excel(out, sheet_name="forecast")
    values = dict(zip(headline["metric"], headline["value"]))
    assert values["schedule_health"] == forecast.schedule_health.value


def test_summary_pdf(tmp_path):
    summary = ProjectSummaryOut.model_validate(
        dict(
            project_id=1,
            name="Sunfield",
            as_of=dt.date(2024, 1, 6),
            progress=dict(piles=25.0, racking=15.0, modules=50.0, overall=37.5),
            today=dict(piles=20, racking=5, modules=300),
            week=dict(piles=50, racking=15, modules=500),
            month=dict(piles=50, racking=15, modules=500),
            forecast=dict(projected_completion_date=None, days_variance=0, schedule_health="green"),
        )
    )
    out = export_summary_pdf(summary, tmp_path / "summary.pdf")

    assert out.read_bytes().startswith(b"%PDF")
