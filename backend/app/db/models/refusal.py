import datetime as dt
from sqlalchemy import Date, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.db.models._mixins import TimestampMixin

class PileRefusal(Base, TimestampMixin):
    """A pile that stopped short of its design depth, tracked until remediated."""

    __tablename__ = "pile_refusal"

    id: Mapped[int] = mapped_column(primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("project.id", ondelete="CASCADE"), index=True)
    reported_by: Mapped[int | None] = mapped_column(ForeignKey("user.id", ondelete="SET NULL"), nullable=True)

    pile_id: Mapped[str] = mapped_column(String(64), index=True)
    block: Mapped[str | None] = mapped_column(String(64), nullable=True)
    row: Mapped[str | None] = mapped_column(String(64), nullable=True)
    pile_number: Mapped[str | None] = mapped_column(String(64), nullable=True)

    date_discovered: Mapped[dt.date] = mapped_column(Date, index=True)
    target_depth: Mapped[float] = mapped_column(Float)
    achieved_depth: Mapped[float] = mapped_column(Float)
    refusal_reason: Mapped[str] = mapped_column(String(256))
    refusal_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(String(16), default="open")  # open|in_remediation|remediated|closed
    remediation_method: Mapped[str | None] = mapped_column(String(256), nullable=True)
    remediation_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    engineer_approval: Mapped[str | None] = mapped_column(String(256), nullable=True)

    project = relationship("Project", back_populates="refusals")
    reporter = relationship("User")

    @property
    def depth_shortfall(self) -> float:
        return max(0.0, (self.target_depth or 0.0) - (self.achieved_depth or 0.0))
