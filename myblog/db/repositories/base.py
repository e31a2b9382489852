"""Generic repository over a SQLAlchemy session."""

from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

from myblog.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """
    By-id, list, create, update, delete and count for one model.

    Writes commit immediately; callers that need a wider transaction should
    use the session directly.
    """

    model: type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, id: int) -> Optional[ModelT]:
        return self.db.get(self.model, id)

    def get_all(self, limit: Optional[int] = None, offset: int = 0) -> list[ModelT]:
        query = self.db.query(self.model).order_by(self.model.id)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def create(self, obj: ModelT) -> ModelT:
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def update(self, obj: ModelT, **fields: Any) -> ModelT:
        for name, value in fields.items():
            setattr(obj, name, value)
        if hasattr(obj, "updated_at"):
            obj.updated_at = func.now()
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, id: int) -> bool:
        obj = self.get_by_id(id)
        if obj is None:
            return False
        self.db.delete(obj)
        self.db.commit()
        return True

    def count(self) -> int:
        return self.db.query(func.count(self.model.id)).scalar() or 0
