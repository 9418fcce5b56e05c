import datetime as dt
from sqlalchemy.orm import Session, joinedload
from app.db.models.production import ProductionEntry
from app.schemas.production import ProductionEntryIn, ProductionEntryUpdate
from app.services.forecasting.engine import ProductionRecord

def list_entries(
    db: Session,
    project_id: int,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
    newest_first: bool = True,
):
    q = db.query(ProductionEntry).filter(ProductionEntry.project_id == project_id)
    if date_from is not None:
        q = q.filter(ProductionEntry.date >= date_from)
    if date_to is not None:
        q = q.filter(ProductionEntry.date <= date_to)
    order = ProductionEntry.date.desc() if newest_first else ProductionEntry.date.asc()
    return q.options(joinedload(ProductionEntry.user)).order_by(order, ProductionEntry.id).all()

def get_entry(db: Session, entry_id: int) -> ProductionEntry | None:
    return db.query(ProductionEntry).filter(ProductionEntry.id == entry_id).one_or_none()

def find_synced_entry(db: Session, device_id: str, local_id: str) -> ProductionEntry | None:
    return (
        db.query(ProductionEntry)
        .filter(ProductionEntry.device_id == device_id, ProductionEntry.local_id == local_id)
        .one_or_none()
    )

def create_entry(db: Session, data: ProductionEntryIn, user_id: int | None = None) -> ProductionEntry:
    e = ProductionEntry(**data.model_dump(), user_id=user_id)
    db.add(e)
    db.commit()
    db.refresh(e)
    return e

def update_entry(db: Session, e: ProductionEntry, data: ProductionEntryUpdate) -> ProductionEntry:
    for k, v in data.model_dump(exclude_unset=True).items():
        if v is not None or k in ("crew", "notes"):
            setattr(e, k, v)
    db.commit()
    db.refresh(e)
    return e

def delete_entry(db: Session, e: ProductionEntry) -> None:
    db.delete(e)
    db.commit()

def to_record(e: ProductionEntry) -> ProductionRecord:
    return ProductionRecord(
        date=e.date,
        piles=e.piles or 0,
        racking_tables=e.racking_tables or 0,
        modules=e.modules or 0,
    )
