import datetime as dt
from sqlalchemy import ForeignKey, Date, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.models._mixins import TimestampMixin

class ProductionEntry(Base, TimestampMixin):
    __tablename__ = "production_entry"
    __table_args__ = (
        # offline clients replay with the same (device_id, local_id)
        UniqueConstraint("device_id", "local_id", name="uq_production_entry_device_local"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("project.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("user.id", ondelete="SET NULL"), nullable=True)

    date: Mapped[dt.date] = mapped_column(Date, index=True)
    piles: Mapped[int] = mapped_column(Integer, default=0)
    racking_tables: Mapped[int] = mapped_column(Integer, default=0)
    modules: Mapped[int] = mapped_column(Integer, default=0)

    crew: Mapped[str | None] = mapped_column(String(128), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    local_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    device_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    project = relationship("Project", back_populates="production_entries")
    user = relationship("User")
