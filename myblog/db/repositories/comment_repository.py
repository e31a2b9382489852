from sqlalchemy import func

from myblog.models import Comment

from .base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    def get_by_passage_id(self, passage_id: int) -> list[Comment]:
        return (
            self.db.query(Comment)
            .filter(Comment.passage_id == passage_id)
            .order_by(Comment.created_at, Comment.id)
            .all()
        )

    def count_by_passage_id(self, passage_id: int) -> int:
        return (
            self.db.query(func.count(Comment.id))
            .filter(Comment.passage_id == passage_id)
            .scalar()
            or 0
        )
