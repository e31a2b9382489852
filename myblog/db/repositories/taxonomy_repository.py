from typing import Optional

from myblog.models import Category, Tag

from .base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    model = Category

    def get_all_enabled(self) -> list[Category]:
        return (
            self.db.query(Category)
            .filter(Category.is_enabled.is_(True))
            .order_by(Category.sort_order, Category.id)
            .all()
        )

    def get_by_name(self, name: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.name == name).first()


class TagRepository(BaseRepository[Tag]):
    model = Tag

    def get_all_enabled(self) -> list[Tag]:
        return (
            self.db.query(Tag)
            .filter(Tag.is_enabled.is_(True))
            .order_by(Tag.sort_order, Tag.id)
            .all()
        )

    def get_by_name(self, name: str) -> Optional[Tag]:
        return self.db.query(Tag).filter(Tag.name == name).first()
