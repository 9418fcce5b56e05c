from sqlalchemy.orm import Session
from app.db.models.refusal import PileRefusal
from app.schemas.refusal import PileRefusalIn, PileRefusalUpdate

def list_refusals(db: Session, project_id: int, status: str | None = None):
    q = db.query(PileRefusal).filter(PileRefusal.project_id == project_id)
    if status:
        q = q.filter(PileRefusal.status == status)
    return q.order_by(PileRefusal.date_discovered.desc(), PileRefusal.id.desc()).all()

def get_refusal(db: Session, refusal_id: int) -> PileRefusal | None:
    return db.query(PileRefusal).filter(PileRefusal.id == refusal_id).one_or_none()

def create_refusal(db: Session, data: PileRefusalIn, reported_by: int | None = None) -> PileRefusal:
    r = PileRefusal(**data.model_dump(), status="open", reported_by=reported_by)
    db.add(r)
    db.commit()
    db.refresh(r)
    return r

def update_refusal(db: Session, r: PileRefusal, data: PileRefusalUpdate) -> PileRefusal:
    for k, v in data.model_dump(exclude_unset=True).items():
        if v is not None or k in ("remediation_method", "remediation_date", "engineer_approval", "refusal_notes"):
            setattr(r, k, v)
    db.commit()
    db.refresh(r)
    return r
