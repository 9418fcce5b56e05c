import datetime as dt
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.deps import ALL_ROLES, get_db, require_roles
from app.core.logging import logger
from app.db.models.user import Role, User
from app.schemas.production import SyncOut
from app.schemas.qc import (
    QCInspectionIn,
    QCInspectionOut,
    QCInspectionUpdate,
    QCIssueOut,
    QCIssueUpdate,
    QCSyncIn,
)
from app.crud.projects import get_project
from app.crud.qc import (
    create_inspection,
    find_synced_inspection,
    get_inspection,
    get_issue,
    list_inspections,
    list_issues,
    update_inspection,
    update_issue,
)
from app.services.sync import replay

router = APIRouter()

INSPECTORS = (Role.admin, Role.project_manager, Role.qc_inspector)

def _project_or_404(db: Session, project_id: int):
    if not get_project(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")

@router.get("", response_model=list[QCInspectionOut])
def get_inspections(
    project_id: int = Query(...),
    date_from: dt.date | None = Query(None),
    date_to: dt.date | None = Query(None),
    status: str | None = Query(None, pattern="^(pass|fail)$"),
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*ALL_ROLES)),
):
    _project_or_404(db, project_id)
    return list_inspections(db, project_id, date_from=date_from, date_to=date_to, status=status)

@router.post("", response_model=QCInspectionOut)
def post_inspection(data: QCInspectionIn, db: Session = Depends(get_db), user: User = Depends(require_roles(*INSPECTORS))):
    _project_or_404(db, data.project_id)
    insp = create_inspection(db, data, user_id=user.id)
    logger.info(
        "qc_inspection_created",
        project_id=data.project_id,
        inspection_id=insp.id,
        category=insp.category,
        status=insp.status,
        items=len(insp.items),
    )
    return insp

@router.get("/issues", response_model=list[QCIssueOut])
def get_issues(
    project_id: int = Query(...),
    status: str | None = Query(None, pattern="^(open|in_progress|corrected|verified|closed)$"),
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*ALL_ROLES)),
):
    _project_or_404(db, project_id)
    return list_issues(db, project_id, status=status)

@router.put("/issues/{issue_id}", response_model=QCIssueOut)
def put_issue(
    issue_id: int,
    data: QCIssueUpdate,
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*INSPECTORS)),
):
    issue = get_issue(db, issue_id)
    if not issue:
        raise HTTPException(status_code=404, detail="Issue not found")
    return update_issue(db, issue, data)

@router.post("/sync", response_model=SyncOut)
def sync_inspections(data: QCSyncIn, db: Session = Depends(get_db), user: User = Depends(require_roles(*INSPECTORS))):
    user_id = user.id
    return replay(
        db,
        "inspection",
        data.items,
        find_synced_inspection,
        lambda s, item: create_inspection(s, item, user_id=user_id),
    )

@router.get("/{inspection_id}", response_model=QCInspectionOut)
def get_one_inspection(inspection_id: int, db: Session = Depends(get_db), _user=Depends(require_roles(*ALL_ROLES))):
    insp = get_inspection(db, inspection_id)
    if not insp:
        raise HTTPException(status_code=404, detail="Inspection not found")
    return insp

@router.put("/{inspection_id}", response_model=QCInspectionOut)
def put_inspection(
    inspection_id: int,
    data: QCInspectionUpdate,
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*INSPECTORS)),
):
    insp = get_inspection(db, inspection_id)
    if not insp:
        raise HTTPException(status_code=404, detail="Inspection not found")
    return update_inspection(db, insp, data)
