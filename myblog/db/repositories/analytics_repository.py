"""Visitor and per-article view analytics."""

import datetime
from typing import Optional

from sqlalchemy import func

from myblog.models import ArticleView, Passage, Visitor

from .base import BaseRepository


class VisitorRepository(BaseRepository[Visitor]):
    model = Visitor

    def record_visit(
        self, ip: str, user_agent: str = "", visit_date: Optional[str] = None
    ) -> Visitor:
        """
        Record one visit per ``(ip, visit_date)``.

        A repeated visit on the same day returns the existing row unchanged.
        ``visit_date`` defaults to today as ``YYYY-MM-DD``.
        """
        visit_date = visit_date or datetime.date.today().isoformat()
        existing = (
            self.db.query(Visitor)
            .filter(Visitor.ip == ip, Visitor.visit_date == visit_date)
            .first()
        )
        if existing is not None:
            return existing
        return self.create(Visitor(ip=ip, user_agent=user_agent, visit_date=visit_date))

    def count_by_date(self, visit_date: str) -> int:
        return (
            self.db.query(func.count(Visitor.id))
            .filter(Visitor.visit_date == visit_date)
            .scalar()
            or 0
        )


class ArticleViewRepository(BaseRepository[ArticleView]):
    model = ArticleView

    def record_view(
        self,
        passage_id: int,
        ip: str,
        user_agent: str = "",
        country: str = "",
        city: str = "",
        region: str = "",
    ) -> ArticleView:
        now = datetime.datetime.now()
        return self.create(
            ArticleView(
                passage_id=passage_id,
                ip=ip,
                user_agent=user_agent,
                country=country,
                city=city,
                region=region,
                view_date=now.strftime("%Y-%m-%d"),
                view_time=now,
            )
        )

    def count_for_passage(self, passage_id: int) -> int:
        return (
            self.db.query(func.count(ArticleView.id))
            .filter(ArticleView.passage_id == passage_id)
            .scalar()
            or 0
        )

    def most_viewed(self, limit: int = 10) -> list[tuple[Passage, int]]:
        """The ``limit`` passages with the most recorded views, with their counts."""
        views = func.count(ArticleView.id).label("views")
        rows = (
            self.db.query(Passage, views)
            .join(ArticleView, ArticleView.passage_id == Passage.id)
            .group_by(Passage.id)
            .order_by(views.desc(), Passage.id)
            .limit(limit)
            .all()
        )
        return [(passage, count) for passage, count in rows]
