"""SQLAlchemy ORM model for catalog documents."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog_admin.infrastructure.database.base import Base


class DocumentModel(Base):
    """ORM model, maps to the 'documents' table.

    One row per document; ``collection`` scopes it and ``data`` holds the
    schemaless field map exactly as the console wrote it.
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    collection: Mapped[str] = mapped_column(String(100), nullable=False)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_documents_collection", "collection"),
    )

    def __repr__(self) -> str:
        return f"<DocumentModel(id={self.id}, collection='{self.collection}')>"
