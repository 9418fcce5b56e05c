from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.deps import ALL_ROLES, get_db, require_roles
from app.core.logging import logger
from app.db.models.user import Role, User
from app.schemas.refusal import PileRefusalIn, PileRefusalOut, PileRefusalUpdate
from app.crud.projects import get_project
from app.crud.refusals import create_refusal, get_refusal, list_refusals, update_refusal

router = APIRouter()

REPORTERS = (Role.admin, Role.project_manager, Role.installer, Role.qc_inspector)
REMEDIATORS = (Role.admin, Role.project_manager, Role.qc_inspector)

@router.get("", response_model=list[PileRefusalOut])
def get_refusals(
    project_id: int = Query(...),
    status: str | None = Query(None, pattern="^(open|in_remediation|remediated|closed)$"),
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*ALL_ROLES)),
):
    if not get_project(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return list_refusals(db, project_id, status=status)

@router.post("", response_model=PileRefusalOut)
def post_refusal(data: PileRefusalIn, db: Session = Depends(get_db), user: User = Depends(require_roles(*REPORTERS))):
    if not get_project(db, data.project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    r = create_refusal(db, data, reported_by=user.id)
    logger.info("pile_refusal_reported", project_id=data.project_id, refusal_id=r.id, pile_id=r.pile_id)
    return r

@router.get("/{refusal_id}", response_model=PileRefusalOut)
def get_one_refusal(refusal_id: int, db: Session = Depends(get_db), _user=Depends(require_roles(*ALL_ROLES))):
    r = get_refusal(db, refusal_id)
    if not r:
        raise HTTPException(status_code=404, detail="Refusal not found")
    return r

@router.put("/{refusal_id}", response_model=PileRefusalOut)
def put_refusal(
    refusal_id: int,
    data: PileRefusalUpdate,
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*REMEDIATORS)),
):
    r = get_refusal(db, refusal_id)
    if not r:
        raise HTTPException(status_code=404, detail="Refusal not found")
    if data.status in ("remediated", "closed") and not (data.remediation_method or r.remediation_method):
        raise HTTPException(status_code=422, detail="remediation_method is required to close a refusal")
    return update_refusal(db, r, data)
