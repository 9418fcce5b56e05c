import datetime as dt
from sqlalchemy import Boolean, Date, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.models._mixins import TimestampMixin

class QCInspection(Base, TimestampMixin):
    __tablename__ = "qc_inspection"
    __table_args__ = (
        UniqueConstraint("device_id", "local_id", name="uq_qc_inspection_device_local"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("project.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("user.id", ondelete="SET NULL"), nullable=True)

    date: Mapped[dt.date] = mapped_column(Date, index=True)
    category: Mapped[str] = mapped_column(String(16))  # piles|racking|modules
    scope: Mapped[str] = mapped_column(String(32), default="individual")
    scope_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    area: Mapped[str | None] = mapped_column(String(128), nullable=True)
    pile_ids: Mapped[str | None] = mapped_column(Text, nullable=True)
    pile_type: Mapped[str] = mapped_column(String(16), default="interior")  # interior|exterior|motor
    status: Mapped[str] = mapped_column(String(16), default="pass")  # pass|fail
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    local_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    device_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    project = relationship("Project", back_populates="inspections")
    user = relationship("User")
    items = relationship(
        "QCInspectionItem", back_populates="inspection", cascade="all, delete-orphan", order_by="QCInspectionItem.id"
    )
    issues = relationship("QCIssue", back_populates="inspection", order_by="QCIssue.id")


class QCInspectionItem(Base):
    __tablename__ = "qc_inspection_item"

    id: Mapped[int] = mapped_column(primary_key=True)
    inspection_id: Mapped[int] = mapped_column(ForeignKey("qc_inspection.id", ondelete="CASCADE"), index=True)

    name: Mapped[str] = mapped_column(String(128))
    pile_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    measurement_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    measured_value: Mapped[float] = mapped_column(Float)
    min_value: Mapped[float] = mapped_column(Float)
    max_value: Mapped[float] = mapped_column(Float)
    unit: Mapped[str] = mapped_column(String(16))
    passed: Mapped[bool] = mapped_column(Boolean)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    inspection = relationship("QCInspection", back_populates="items")


class QCIssue(Base, TimestampMixin):
    __tablename__ = "qc_issue"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("project.id", ondelete="CASCADE"), index=True)
    inspection_id: Mapped[int | None] = mapped_column(
        ForeignKey("qc_inspection.id", ondelete="SET NULL"), nullable=True, index=True
    )

    status: Mapped[str] = mapped_column(String(16), default="open", index=True)  # open|in_progress|corrected|verified|closed
    description: Mapped[str] = mapped_column(Text)
    category: Mapped[str] = mapped_column(String(16))
    pile_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    assigned_to: Mapped[str | None] = mapped_column(String(128), nullable=True)

    opened_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    corrected_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    verified_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    project = relationship("Project", back_populates="qc_issues")
    inspection = relationship("QCInspection", back_populates="issues")
