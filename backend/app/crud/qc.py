import datetime as dt
from sqlalchemy.orm import Session, selectinload
from app.db.models.qc import QCInspection, QCInspectionItem, QCIssue
from app.schemas.qc import QCInspectionIn, QCInspectionUpdate, QCIssueUpdate

def _now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)

def list_inspections(
    db: Session,
    project_id: int,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
    status: str | None = None,
):
    q = db.query(QCInspection).filter(QCInspection.project_id == project_id)
    if date_from is not None:
        q = q.filter(QCInspection.date >= date_from)
    if date_to is not None:
        q = q.filter(QCInspection.date <= date_to)
    if status:
        q = q.filter(QCInspection.status == status)
    q = q.options(selectinload(QCInspection.items), selectinload(QCInspection.issues))
    return q.order_by(QCInspection.date.desc(), QCInspection.id.desc()).all()

def get_inspection(db: Session, inspection_id: int) -> QCInspection | None:
    return db.query(QCInspection).filter(QCInspection.id == inspection_id).one_or_none()

def find_synced_inspection(db: Session, device_id: str, local_id: str) -> QCInspection | None:
    return (
        db.query(QCInspection)
        .filter(QCInspection.device_id == device_id, QCInspection.local_id == local_id)
        .one_or_none()
    )

def create_inspection(db: Session, data: QCInspectionIn, user_id: int | None = None) -> QCInspection:
    """Store an inspection with its measured items.

    A failing inspection opens a QC issue in the same transaction.
    """
    items = [QCInspectionItem(**i.model_dump()) for i in data.items]
    status = data.status or ("fail" if any(not i.passed for i in items) else "pass")
    insp = QCInspection(
        **data.model_dump(exclude={"items", "status", "issue_description", "assigned_to"}),
        status=status,
        user_id=user_id,
        items=items,
    )
    db.add(insp)
    if status == "fail":
        where = f" in {data.area}" if data.area else ""
        db.add(QCIssue(
            project_id=data.project_id,
            inspection=insp,
            status="open",
            description=data.issue_description or f"{data.category} inspection failed{where}",
            category=data.category,
            pile_id=next((i.pile_id for i in items if not i.passed and i.pile_id), None),
            assigned_to=data.assigned_to,
            opened_at=_now(),
        ))
    db.commit()
    db.refresh(insp)
    return insp

def update_inspection(db: Session, insp: QCInspection, data: QCInspectionUpdate) -> QCInspection:
    for k, v in data.model_dump(exclude_unset=True).items():
        if v is not None or k == "notes":
            setattr(insp, k, v)
    db.commit()
    db.refresh(insp)
    return insp

def list_issues(db: Session, project_id: int, status: str | None = None):
    q = db.query(QCIssue).filter(QCIssue.project_id == project_id)
    if status:
        q = q.filter(QCIssue.status == status)
    return q.order_by(QCIssue.id).all()

def count_open_issues(db: Session, project_id: int) -> int:
    return db.query(QCIssue).filter(QCIssue.project_id == project_id, QCIssue.status == "open").count()

def get_issue(db: Session, issue_id: int) -> QCIssue | None:
    return db.query(QCIssue).filter(QCIssue.id == issue_id).one_or_none()

def update_issue(db: Session, issue: QCIssue, data: QCIssueUpdate) -> QCIssue:
    for k, v in data.model_dump(exclude_unset=True).items():
        if v is not None or k == "assigned_to":
            setattr(issue, k, v)
    # stamp each lifecycle step once
    if issue.status == "corrected" and issue.corrected_at is None:
        issue.corrected_at = _now()
    if issue.status == "verified":
        if issue.corrected_at is None:
            issue.corrected_at = _now()
        if issue.verified_at is None:
            issue.verified_at = _now()
    db.commit()
    db.refresh(issue)
    return issue
