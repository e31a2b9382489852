"""Per-entity repositories: by-id, list, create, update, delete plus entity queries."""

from .about_card_repository import AboutMainCardRepository, AboutSubCardRepository
from .analytics_repository import ArticleViewRepository, VisitorRepository
from .attachment_repository import AttachmentRepository
from .base import BaseRepository
from .comment_repository import CommentRepository
from .music_repository import MusicTrackRepository
from .passage_repository import PassageRepository
from .setting_repository import SettingRepository
from .taxonomy_repository import CategoryRepository, TagRepository
from .user_repository import UserRepository

__all__ = [
    "AboutMainCardRepository",
    "AboutSubCardRepository",
    "ArticleViewRepository",
    "AttachmentRepository",
    "BaseRepository",
    "CategoryRepository",
    "CommentRepository",
    "MusicTrackRepository",
    "PassageRepository",
    "SettingRepository",
    "TagRepository",
    "UserRepository",
    "VisitorRepository",
]
