from sqlalchemy.orm import Session
from app.db.models.project import Project
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.services.forecasting.engine import ProjectPlan

def list_projects(db: Session, status: str | None = None):
    q = db.query(Project)
    if status:
        q = q.filter(Project.status == status)
    return q.order_by(Project.id).all()

def get_project(db: Session, project_id: int) -> Project | None:
    return db.query(Project).filter(Project.id == project_id).one_or_none()

def get_project_by_code(db: Session, code: str) -> Project | None:
    return db.query(Project).filter(Project.code == code).one_or_none()

def create_project(db: Session, data: ProjectCreate) -> Project:
    p = Project(**data.model_dump())
    db.add(p)
    db.commit()
    db.refresh(p)
    return p


def update_project(db: Session, p: Project, data: ProjectUpdate) -> Project:
    for k, v in data.model_dump(exclude_unset=True).items():
        if v is not None or k in ("actual_start_date", "actual_end_date", "location", "description"):
            setattr(p, k, v)
    db.commit()
    db.refresh(p)
    return p


def delete_project(db: Session, p: Project) -> None:
    db.delete(p)
    db.commit()


def to_plan(p: Project) -> ProjectPlan:
    return ProjectPlan(
        total_piles=p.total_piles or 0,
        total_racking_tables=p.total_racking_tables or 0,
        total_modules=p.total_modules or 0,
        planned_start_date=p.planned_start_date,
        planned_end_date=p.planned_end_date,
        planned_piles_per_day=p.planned_piles_per_day or 0.0,
        planned_racking_per_day=p.planned_racking_per_day or 0.0,
        planned_modules_per_day=p.planned_modules_per_day or 0.0,
    )
