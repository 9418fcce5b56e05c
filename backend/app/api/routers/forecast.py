import datetime as dt
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.deps import ALL_ROLES, get_db, get_today, require_roles
from app.schemas.reports import CategoryCountsOut, ForecastOut, PercentCompleteOut, ProjectSummaryOut
from app.services.forecasting.engine import StatsPeriod
from app.services.reports.service import (
    ProjectNotFound,
    project_forecast,
    project_progress,
    project_stats,
    project_summary,
)

router = APIRouter()

@router.get("/{project_id}", response_model=ForecastOut)
def forecast(
    project_id: int,
    db: Session = Depends(get_db),
    today: dt.date = Depends(get_today),
    _user=Depends(require_roles(*ALL_ROLES)),
):
    try:
        return project_forecast(db, project_id, today)
    except ProjectNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/{project_id}/progress", response_model=PercentCompleteOut)
def progress(project_id: int, db: Session = Depends(get_db), _user=Depends(require_roles(*ALL_ROLES))):
    try:
        return project_progress(db, project_id)
    except ProjectNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/{project_id}/stats", response_model=CategoryCountsOut)
def stats(
    project_id: int,
    period: StatsPeriod = Query(StatsPeriod.today),
    db: Session = Depends(get_db),
    today: dt.date = Depends(get_today),
    _user=Depends(require_roles(*ALL_ROLES)),
):
    try:
        return project_stats(db, project_id, period, today)
    except ProjectNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/{project_id}/summary", response_model=ProjectSummaryOut)
def summary(
    project_id: int,
    db: Session = Depends(get_db),
    today: dt.date = Depends(get_today),
    _user=Depends(require_roles(*ALL_ROLES)),
):
    try:
        return project_summary(db, project_id, today)
    except ProjectNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
