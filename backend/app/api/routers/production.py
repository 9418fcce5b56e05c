import datetime as dt
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.core.deps import ALL_ROLES, get_db, require_roles
from app.core.logging import logger
from app.db.models.user import Role, User
from app.schemas.production import (
    ProductionEntryIn,
    ProductionEntryOut,
    ProductionEntryUpdate,
    SyncIn,
    SyncOut,
)
from app.crud.production import create_entry, delete_entry, find_synced_entry, get_entry, list_entries, update_entry
from app.crud.projects import get_project
from app.services.sync import replay

router = APIRouter()

WRITERS = (Role.admin, Role.project_manager, Role.installer)

@router.get("", response_model=list[ProductionEntryOut])
def get_entries(
    project_id: int = Query(...),
    date_from: dt.date | None = Query(None),
    date_to: dt.date | None = Query(None),
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*ALL_ROLES)),
):
    if not get_project(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return list_entries(db, project_id, date_from=date_from, date_to=date_to)

@router.post("", response_model=ProductionEntryOut)
def post_entry(data: ProductionEntryIn, db: Session = Depends(get_db), user: User = Depends(require_roles(*WRITERS))):
    if not get_project(db, data.project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    e = create_entry(db, data, user_id=user.id)
    logger.info("production_entry_created", project_id=data.project_id, entry_id=e.id, date=data.date.isoformat())
    return e

@router.put("/{entry_id}", response_model=ProductionEntryOut)
def put_entry(
    entry_id: int,
    data: ProductionEntryUpdate,
    db: Session = Depends(get_db),
    _user=Depends(require_roles(*WRITERS)),
):
    e = get_entry(db, entry_id)
    if not e:
        raise HTTPException(status_code=404, detail="Entry not found")
    return update_entry(db, e, data)

@router.delete("/{entry_id}")
def remove_entry(
    entry_id: int,
    db: Session = Depends(get_db),
    _user=Depends(require_roles(Role.admin, Role.project_manager)),
):
    e = get_entry(db, entry_id)
    if not e:
        raise HTTPException(status_code=404, detail="Entry not found")
    delete_entry(db, e)
    return {"status": "ok"}

@router.post("/sync", response_model=SyncOut)
def sync_entries(data: SyncIn, db: Session = Depends(get_db), user: User = Depends(require_roles(*WRITERS))):
    user_id = user.id
    return replay(
        db,
        "production",
        data.items,
        find_synced_entry,
        lambda s, item: create_entry(s, item, user_id=user_id),
    )
