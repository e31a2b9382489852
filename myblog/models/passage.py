"""Articles ("passages") and their reader analytics."""

import datetime
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base

CURRENT_TIMESTAMP = text("CURRENT_TIMESTAMP")


class Passage(Base):
    __tablename__ = "passages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, comment="Rendered HTML")
    original_content: Mapped[Optional[str]] = mapped_column(
        Text, comment="Markdown source"
    )
    summary: Mapped[Optional[str]] = mapped_column(Text)
    author: Mapped[str] = mapped_column(String(100), server_default="管理员")
    tags: Mapped[str] = mapped_column(
        String(1024), server_default="[]", comment="JSON array of tag names"
    )
    category: Mapped[str] = mapped_column(String(100), server_default="未分类")
    status: Mapped[str] = mapped_column(
        String(20), server_default="published", comment="published, draft or pending"
    )
    file_path: Mapped[Optional[str]] = mapped_column(
        String(512), comment="Markdown path relative to the markdown root, no extension"
    )
    show_title: Mapped[bool] = mapped_column(Boolean, server_default="1")
    visibility: Mapped[str] = mapped_column(
        String(20), server_default="public", comment="public or private"
    )
    is_scheduled: Mapped[bool] = mapped_column(Boolean, server_default="0")
    published_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, server_default=CURRENT_TIMESTAMP
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, server_default=CURRENT_TIMESTAMP
    )

    comments: Mapped[list["Comment"]] = relationship(
        "Comment", back_populates="passage", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<Passage id={self.id} title={self.title!r}>"


Index("idx_passages_file_path", Passage.file_path, unique=True)
Index("idx_passages_status", Passage.status)
Index("idx_passages_category", Passage.category)
Index("idx_passages_created_at", Passage.created_at)
Index(
    "idx_passages_status_created",
    Passage.status,
    Passage.__table__.c.created_at.desc(),
)
Index("idx_passages_category_status", Passage.category, Passage.status)
Index("idx_passages_visibility", Passage.visibility)
Index("idx_passages_published_at", Passage.published_at)
Index("idx_passages_scheduled", Passage.is_scheduled, Passage.published_at)


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(100), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    passage_id: Mapped[int] = mapped_column(
        ForeignKey("passages.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, server_default=CURRENT_TIMESTAMP
    )

    passage: Mapped["Passage"] = relationship("Passage", back_populates="comments")


Index("idx_comments_passage_id", Comment.passage_id)
Index(
    "idx_comments_passage_created",
    Comment.passage_id,
    Comment.__table__.c.created_at.desc(),
)
Index("idx_comments_created_at", Comment.created_at)


class Visitor(Base):
    """One row per visitor IP per day."""

    __tablename__ = "visitors"
    __table_args__ = (UniqueConstraint("ip", "visit_date", name="uq_visitors_ip_date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ip: Mapped[str] = mapped_column(String(45), nullable=False)
    user_agent: Mapped[Optional[str]] = mapped_column(Text)
    visit_date: Mapped[str] = mapped_column(
        String(10), nullable=False, comment="YYYY-MM-DD"
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, server_default=CURRENT_TIMESTAMP
    )


Index("idx_visitors_date", Visitor.visit_date)


class ArticleView(Base):
    __tablename__ = "article_views"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    passage_id: Mapped[int] = mapped_column(
        ForeignKey("passages.id", ondelete="CASCADE"), nullable=False
    )
    ip: Mapped[str] = mapped_column(String(45), nullable=False)
    user_agent: Mapped[Optional[str]] = mapped_column(Text)
    country: Mapped[str] = mapped_column(String(100), server_default="")
    city: Mapped[str] = mapped_column(String(100), server_default="")
    region: Mapped[str] = mapped_column(String(100), server_default="")
    view_date: Mapped[str] = mapped_column(String(10), nullable=False)
    view_time: Mapped[datetime.datetime] = mapped_column(
        DateTime, server_default=CURRENT_TIMESTAMP
    )
    duration: Mapped[int] = mapped_column(Integer, server_default="0")
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime, server_default=CURRENT_TIMESTAMP
    )


Index("idx_article_views_passage_id", ArticleView.passage_id)
Index("idx_article_views_passage_date", ArticleView.passage_id, ArticleView.view_date)
Index("idx_article_views_ip_date", ArticleView.ip, ArticleView.view_date)
Index("idx_article_views_date", ArticleView.view_date)
Index("idx_article_views_country", ArticleView.country)
Index("idx_article_views_city_region", ArticleView.city, ArticleView.region)
