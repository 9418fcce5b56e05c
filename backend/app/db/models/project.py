import datetime as dt
from sqlalchemy import String, Text, Date, Integer, Float
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.models._mixins import TimestampMixin

class Project(Base, TimestampMixin):
    __tablename__ = "project"

    id: Mapped[int] = mapped_column(primary_key=True)
    code: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(256))
    location: Mapped[str | None] = mapped_column(String(256), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), default="active")  # active|completed|on_hold

    total_piles: Mapped[int] = mapped_column(Integer, default=0)
    total_racking_tables: Mapped[int] = mapped_column(Integer, default=0)
    total_modules: Mapped[int] = mapped_column(Integer, default=0)

    planned_start_date: Mapped[dt.date] = mapped_column(Date)
    planned_end_date: Mapped[dt.date] = mapped_column(Date)
    actual_start_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    actual_end_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)

    # fallback rates until real production exists
    planned_piles_per_day: Mapped[float] = mapped_column(Float, default=0.0)
    planned_racking_per_day: Mapped[float] = mapped_column(Float, default=0.0)
    planned_modules_per_day: Mapped[float] = mapped_column(Float, default=0.0)

    production_entries = relationship(
        "ProductionEntry", back_populates="project", cascade="all, delete-orphan"
    )
    inspections = relationship("QCInspection", back_populates="project", cascade="all, delete-orphan")
    qc_issues = relationship("QCIssue", back_populates="project", cascade="all, delete-orphan")
    refusals = relationship("PileRefusal", back_populates="project", cascade="all, delete-orphan")
