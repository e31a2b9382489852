import datetime
from typing import Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Attachment(Base):
    """An uploaded file, optionally bound to a passage."""

    __tablename__ = "attachments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    stored_name: Mapped[str] = mapped_column(String(255), nullable=False)
    file_path: Mapped[str] = mapped_column(String(1024), nullable=False)
    file_type: Mapped[str] = mapped_column(String(50), nullable=False)
    content_type: Mapped[str] = mapped_column(String(255), nullable=False)
    file_size: Mapped[int] = mapped_column(BigInteger, nullable=False)
    passage_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("passages.id", ondelete="CASCADE")
    )
    visibility: Mapped[str] = mapped_column(String(20), server_default="public")
    show_in_passage: Mapped[bool] = mapped_column(Boolean, server_default="1")
    uploaded_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, server_default=text("CURRENT_TIMESTAMP")
    )


Index("idx_attachments_passage_id", Attachment.passage_id)
Index("idx_attachments_type", Attachment.file_type)
Index("idx_attachments_visibility", Attachment.visibility)
Index("idx_attachments_uploaded_at", Attachment.uploaded_at)
Index(
    "idx_attachments_passage_visibility", Attachment.passage_id, Attachment.visibility
)
Index("idx_attachments_show_in_passage", Attachment.show_in_passage)
