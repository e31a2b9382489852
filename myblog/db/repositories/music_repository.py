from myblog.models import MusicTrack

from .base import BaseRepository


class MusicTrackRepository(BaseRepository[MusicTrack]):
    model = MusicTrack
