from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.deps import ALL_ROLES, get_db, require_roles
from app.core.logging import logger
from app.db.models.user import Role
from app.schemas.project import ProjectCreate, ProjectOut, ProjectUpdate
from app.crud.projects import (
    create_project,
    delete_project,
    get_project,
    get_project_by_code,
    list_projects,
    update_project,
)

router = APIRouter()

def _get_or_404(db: Session, project_id: int):
    p = get_project(db, project_id)
    if not p:
        raise HTTPException(status_code=404, detail="Project not found")
    return p

@router.get("", response_model=list[ProjectOut])
def get_projects(
    status: str | None = Query(None, pattern="^(active|completed|on_hold)$"),
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*ALL_ROLES)),
):
    return list_projects(db, status=status)

@router.post("", response_model=ProjectOut)
def post_project(data: ProjectCreate, db: Session = Depends(get_db), _user=Depends(require_roles(Role.admin, Role.project_manager))):
    if data.planned_end_date < data.planned_start_date:
        # accepted, the forecast floors the span to one day
        logger.warning("project_inverted_plan_window", code=data.code)
    if get_project_by_code(db, data.code):
        raise HTTPException(status_code=409, detail="Project code already exists")
    return create_project(db, data)


@router.get("/{project_id}", response_model=ProjectOut)
def get_one_project(project_id: int, db: Session = Depends(get_db), _user=Depends(require_roles(*ALL_ROLES))):
    return _get_or_404(db, project_id)


@router.put("/{project_id}", response_model=ProjectOut)
def put_project(
    project_id: int,
    data: ProjectUpdate,
    db: Session = Depends(get_db),
    _user=Depends(require_roles(Role.admin, Role.project_manager)),
):
    p = _get_or_404(db, project_id)
    if data.code is not None and data.code != p.code and get_project_by_code(db, data.code):
        raise HTTPException(status_code=409, detail="Project code already exists")
    return update_project(db, p, data)


@router.delete("/{project_id}")
def remove_project(
    project_id: int,
    db: Session = Depends(get_db),
    _user=Depends(require_roles(Role.admin, Role.project_manager)),
):
    p = _get_or_404(db, project_id)
    delete_project(db, p)
    logger.info("project_deleted", project_id=project_id)
    return {"status": "ok"}
