from sqlalchemy import func

from myblog.models import AboutMainCard, AboutSubCard

from .base import BaseRepository


class AboutMainCardRepository(BaseRepository[AboutMainCard]):
    model = AboutMainCard

    def get_all_enabled(self) -> list[AboutMainCard]:
        return (
            self.db.query(AboutMainCard)
            .filter(AboutMainCard.is_enabled.is_(True))
            .order_by(AboutMainCard.sort_order, AboutMainCard.id)
            .all()
        )

    def update_sort_order(self, id: int, sort_order: int) -> bool:
        return self._update_field(id, AboutMainCard.sort_order, sort_order)

    def update_enabled(self, id: int, enabled: bool) -> bool:
        return self._update_field(id, AboutMainCard.is_enabled, enabled)

    def _update_field(self, id: int, column, value) -> bool:
        updated = (
            self.db.query(AboutMainCard)
            .filter(AboutMainCard.id == id)
            .update(
                {column: value, AboutMainCard.updated_at: func.now()},
                synchronize_session=False,
            )
        )
        self.db.commit()
        return updated > 0


class AboutSubCardRepository(BaseRepository[AboutSubCard]):
    model = AboutSubCard

    def get_by_main_card_id(
        self, main_card_id: int, enabled_only: bool = False
    ) -> list[AboutSubCard]:
        query = self.db.query(AboutSubCard).filter(
            AboutSubCard.main_card_id == main_card_id
        )
        if enabled_only:
            query = query.filter(AboutSubCard.is_enabled.is_(True))
        return query.order_by(AboutSubCard.sort_order, AboutSubCard.id).all()

    def delete_by_main_card_id(self, main_card_id: int) -> int:
        """Delete every sub card of ``main_card_id``; returns the number removed."""
        deleted = (
            self.db.query(AboutSubCard)
            .filter(AboutSubCard.main_card_id == main_card_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted
