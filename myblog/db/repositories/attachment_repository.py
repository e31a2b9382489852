from myblog.models import Attachment

from .base import BaseRepository


class AttachmentRepository(BaseRepository[Attachment]):
    model = Attachment

    def get_by_passage_id(
        self, passage_id: int, visible_only: bool = False
    ) -> list[Attachment]:
        query = self.db.query(Attachment).filter(Attachment.passage_id == passage_id)
        if visible_only:
            query = query.filter(
                Attachment.visibility == "public",
                Attachment.show_in_passage.is_(True),
            )
        return query.order_by(Attachment.uploaded_at, Attachment.id).all()

    def update_visibility(self, id: int, visibility: str) -> bool:
        updated = (
            self.db.query(Attachment)
            .filter(Attachment.id == id)
            .update({Attachment.visibility: visibility}, synchronize_session=False)
        )
        self.db.commit()
        return updated > 0
