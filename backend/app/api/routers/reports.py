import datetime as dt
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import FileResponse, Response
from sqlalchemy.orm import Session

from app.core.deps import ALL_ROLES, get_db, get_today, require_roles
from app.db.models.user import Role
from app.schemas.reports import ProjectReportOut, ProjectSummaryOut, ReportType
from app.services.reports.service import ProjectNotFound, project_forecast, project_report, project_summary
from app.services.exports.exporter import (
    default_export_path,
    export_forecast_xlsx,
    export_report_csv,
    export_summary_pdf,
)

router = APIRouter()

EXPORTERS = (Role.admin, Role.project_manager, Role.executive)

@router.get("/project", response_model=ProjectReportOut)
def report(
    project_id: int = Query(...),
    type: ReportType = Query("daily"),
    date_from: dt.date | None = Query(None),
    date_to: dt.date | None = Query(None),
    format: str = Query("json", pattern="^(json|csv)$"),
    db: Session = Depends(get_db),
    today: dt.date = Depends(get_today),
    _user=Depends(require_roles(*ALL_ROLES)),
):
    try:
        data = ProjectReportOut.model_validate(
            project_report(db, project_id, today, report_type=type, date_from=date_from, date_to=date_to)
        )
    except ProjectNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    if format == "csv":
        return Response(
            content=export_report_csv(data),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{data.project.code}_report.csv"'},
        )
    return data

@router.get("/export/forecast.xlsx")
def export_forecast(
    project_id: int = Query(...),
    db: Session = Depends(get_db),
    today: dt.date = Depends(get_today),
    _user=Depends(require_roles(*EXPORTERS)),
):
    try:
        data = project_forecast(db, project_id, today)
    except ProjectNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    out = default_export_path(f"forecast_{project_id}", "xlsx")
    export_forecast_xlsx(data, out)
    return FileResponse(str(out), media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", filename=out.name)

@router.get("/export/summary.pdf")
def export_summary(
    project_id: int = Query(...),
    db: Session = Depends(get_db),
    today: dt.date = Depends(get_today),
    _user=Depends(require_roles(*EXPORTERS)),
):
    try:
        data = ProjectSummaryOut.model_validate(project_summary(db, project_id, today))
    except ProjectNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    out = default_export_path(f"summary_{project_id}", "pdf")
    export_summary_pdf(data, out)
    return FileResponse(str(out), media_type="application/pdf", filename=out.name)
