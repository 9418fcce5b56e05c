import datetime as dt
from sqlalchemy.orm import Session
from app.db.session import SessionLocal
from app.core.config import settings
from app.core.logging import logger
from app.crud.users import get_user_by_login, create_user
from app.schemas.admin import UserCreateIn
from app.db.models.user import Role
from app.crud.projects import list_projects, create_project
from app.crud.production import create_entry
from app.schemas.project import ProjectCreate
from app.schemas.production import ProductionEntryIn
from app.crud.qc import create_inspection
from app.crud.refusals import create_refusal
from app.schemas.qc import QCInspectionIn, QCInspectionItemIn
from app.schemas.refusal import PileRefusalIn

def seed_demo(today: dt.date | None = None):
    today = today or dt.date.today()
    db: Session = SessionLocal()
    try:
        admin = None
        if settings.DEMO_ADMIN_LOGIN and settings.DEMO_ADMIN_PASSWORD:
            admin = get_user_by_login(db, settings.DEMO_ADMIN_LOGIN)
            if not admin:
                admin = create_user(db, UserCreateIn(
                    login=settings.DEMO_ADMIN_LOGIN,
                    password=settings.DEMO_ADMIN_PASSWORD,
                    role=Role.admin,
                    full_name="Demo Admin",
                ))
        if list_projects(db):
            return
        start = today - dt.timedelta(days=30)
        p = create_project(db, ProjectCreate(
            code="SOLAR-1",
            name="Demo Solar Farm",
            location="Pueblo County, CO",
            description="Seeded demo project",
            total_piles=12000,
            total_racking_tables=1500,
            total_modules=54000,
            planned_start_date=start,
            planned_end_date=start + dt.timedelta(days=120),
            planned_piles_per_day=100,
            planned_racking_per_day=12.5,
            planned_modules_per_day=450,
        ))
        # two crews on weekdays, ramping up
        for i in range(30):
            d = start + dt.timedelta(days=i)
            if d.weekday() >= 5:
                continue
            for crew, share in (("Crew A", 0.6), ("Crew B", 0.4)):
                create_entry(db, ProductionEntryIn(
                    project_id=p.id,
                    date=d,
                    piles=int((80 + i * 2) * share),
                    racking_tables=int((8 + i // 3) * share),
                    modules=int((300 + i * 10) * share),
                    crew=crew,
                ), user_id=admin.id if admin else None)
        uid = admin.id if admin else None
        # embedment depth in feet, interior piles 8-10
        for offset, depth in ((3, 9.1), (10, 7.4)):
            create_inspection(db, QCInspectionIn(
                project_id=p.id,
                date=start + dt.timedelta(days=offset),
                category="piles",
                area="Block A",
                items=[QCInspectionItemIn(
                    name="Embedment depth",
                    pile_id=f"A-{offset:03d}",
                    measured_value=depth,
                    min_value=8.0,
                    max_value=10.0,
                    unit="ft",
                )],
            ), user_id=uid)
        create_refusal(db, PileRefusalIn(
            project_id=p.id,
            pile_id="B-117",
            block="B",
            row="12",
            date_discovered=start + dt.timedelta(days=6),
            target_depth=10.0,
            achieved_depth=6.5,
            refusal_reason="Caliche layer",
        ), reported_by=uid)
        logger.info("demo_seeded", project_id=p.id)
    finally:
        db.close()
