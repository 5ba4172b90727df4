"""
db/models/integration.py

Integration model: one ad-platform connection for a user.
"""

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, JSONDocument, TimestampMixin


class IntegrationStatus:
    """Valid integration states."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class Integration(Base, TimestampMixin):
    __tablename__ = "integrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[str] = mapped_column(String(255), nullable=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Catalog id such as google-ads or tiktok-ads",
    )

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=IntegrationStatus.CONNECTED,
    )

    config: Mapped[dict | None] = mapped_column(JSONDocument, nullable=True)

    __table_args__ = (
        Index("ix_integrations_user_id", "user_id"),
        Index("ix_integrations_user_status", "user_id", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<Integration id={self.id} user_id={self.user_id!r} "
            f"type={self.type!r} status={self.status!r}>"
        )
