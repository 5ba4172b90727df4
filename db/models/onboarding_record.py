"""
db/models/onboarding_record.py

OnboardingRecord model: the accumulated wizard answers for one user.
"""

from sqlalchemy import Boolean, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, JSONDocument, TimestampMixin


class OnboardingRecord(Base, TimestampMixin):
    """
    One row per user identifier.

    data_status holds only the status of the latest analysis run; the full
    error report and preview are returned to the caller and never stored.
    """

    __tablename__ = "onboarding_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    step: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="welcome",
        comment="welcome → objectives → upload → analyze → factors → review → complete",
    )

    primary_kpi: Mapped[str | None] = mapped_column(String(100), nullable=True)

    secondary_kpis: Mapped[list | None] = mapped_column(JSONDocument, nullable=True)

    upload_method: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
        comment="manual or integration",
    )

    data_status: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
        comment="analyzing, success or error",
    )

    external_factors: Mapped[list | None] = mapped_column(JSONDocument, nullable=True)

    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (Index("ix_onboarding_records_step", "step"),)

    def __repr__(self) -> str:
        return (
            f"<OnboardingRecord id={self.id} user_id={self.user_id!r} "
            f"step={self.step!r} completed={self.completed}>"
        )
