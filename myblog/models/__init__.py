"""
ORM models for every table the blog persists.

Importing this package registers all tables on ``Base.metadata``.
"""

from .base import Base
from .about_card import AboutMainCard, AboutSubCard
from .attachment import Attachment
from .music import MusicTrack
from .passage import ArticleView, Comment, Passage, Visitor
from .setting import Setting
from .taxonomy import Category, Tag
from .user import User

__all__ = [
    "Base",
    "AboutMainCard",
    "AboutSubCard",
    "ArticleView",
    "Attachment",
    "Category",
    "Comment",
    "MusicTrack",
    "Passage",
    "Setting",
    "Tag",
    "User",
    "Visitor",
]
