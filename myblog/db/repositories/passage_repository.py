from typing import Optional

from sqlalchemy import func

from myblog.models import Passage

from .base import BaseRepository


class PassageRepository(BaseRepository[Passage]):
    model = Passage

    def get_by_file_path(self, file_path: str) -> Optional[Passage]:
        return (
            self.db.query(Passage).filter(Passage.file_path == file_path).first()
        )

    def get_by_status(
        self, status: str, limit: Optional[int] = None, offset: int = 0
    ) -> list[Passage]:
        """Passages with ``status``, newest first."""
        query = (
            self.db.query(Passage)
            .filter(Passage.status == status)
            .order_by(Passage.created_at.desc(), Passage.id.desc())
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def get_by_category(self, category: str) -> list[Passage]:
        return (
            self.db.query(Passage)
            .filter(Passage.category == category)
            .order_by(Passage.created_at.desc(), Passage.id.desc())
            .all()
        )

    def get_all_categories(self) -> list[str]:
        rows = (
            self.db.query(Passage.category)
            .filter(Passage.category.is_not(None), Passage.category != "")
            .distinct()
            .order_by(Passage.category)
            .all()
        )
        return [row[0] for row in rows]

    def count_by_status(self, status: str) -> int:
        return (
            self.db.query(func.count(Passage.id))
            .filter(Passage.status == status)
            .scalar()
            or 0
        )
