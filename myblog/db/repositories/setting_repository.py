from typing import Iterable, Optional

from sqlalchemy import func

from myblog.models import Setting

from .base import BaseRepository


class SettingRepository(BaseRepository[Setting]):
    model = Setting

    def get_by_key(self, key: str) -> Optional[Setting]:
        return self.db.query(Setting).filter(Setting.key == key).first()

    def get_by_keys(self, keys: Iterable[str]) -> list[Setting]:
        keys = list(keys)
        if not keys:
            return []
        return self.db.query(Setting).filter(Setting.key.in_(keys)).all()

    def get_by_category(self, category: str) -> list[Setting]:
        return (
            self.db.query(Setting)
            .filter(Setting.category == category)
            .order_by(Setting.key)
            .all()
        )

    def update_by_key(self, key: str, value: str) -> bool:
        """Set the value of ``key``. Returns False if the key does not exist."""
        updated = (
            self.db.query(Setting)
            .filter(Setting.key == key)
            .update(
                {Setting.value: value, Setting.updated_at: func.now()},
                synchronize_session=False,
            )
        )
        self.db.commit()
        return updated > 0

    def existing_keys(self) -> set[str]:
        return {row[0] for row in self.db.query(Setting.key).all()}
