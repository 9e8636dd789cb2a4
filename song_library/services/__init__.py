"""Services package."""

from song_library.services.counter import VisitCounter
from song_library.services.library import SongLibrary
from song_library.services.locks import ReadWriteLock
from song_library.services.storage import SongStorage

__all__ = ["VisitCounter", "SongLibrary", "ReadWriteLock", "SongStorage"]
