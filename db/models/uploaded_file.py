"""
db/models/uploaded_file.py

UploadedFile model: metadata for one marketing-data file a user uploaded.
The bytes themselves live in the file storage backend under storage_path.
"""

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class UploadedFile(Base, TimestampMixin):
    __tablename__ = "uploaded_files"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[str] = mapped_column(String(255), nullable=False)

    filename: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Stored file name (unique per upload)",
    )

    original_name: Mapped[str] = mapped_column(String(255), nullable=False)

    mimetype: Mapped[str] = mapped_column(String(255), nullable=False)

    size: Mapped[int] = mapped_column(Integer, nullable=False)

    storage_path: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="Path relative to the storage backend root",
    )

    checksum: Mapped[str] = mapped_column(String(64), nullable=False)

    __table_args__ = (Index("ix_uploaded_files_user_created", "user_id", "created_at"),)

    def __repr__(self) -> str:
        return (
            f"<UploadedFile id={self.id} user_id={self.user_id!r} "
            f"original_name={self.original_name!r}>"
        )
