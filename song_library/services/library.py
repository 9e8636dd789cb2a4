from typing import Iterable, Optional

from song_library.schemas import NewSong, Song
from song_library.services.locks import ReadWriteLock


def _matches(value: str, query: Optional[str]) -> bool:
    return query is None or query.lower() in value.lower()


class SongLibrary:
    """
    In-memory song collection shared by all request handlers.

    Songs are kept in insertion order. Every read goes through the shared side
    of the lock and every mutation through the exclusive side, and callers only
    ever receive copies of stored songs.
    """

    def __init__(self, songs: Optional[Iterable[Song]] = None):
        self._songs: list[Song] = [song.model_copy() for song in songs or ()]
        self.lock = ReadWriteLock()

    def __len__(self) -> int:
        return len(self._songs)

    def _next_id(self) -> int:
        return self._songs[-1].id + 1 if self._songs else 1

    async def add(self, new_song: NewSong) -> Song:
        """
        Create a song with the next id and a zero play count.

        Id computation and append happen under the same write acquisition, so
        concurrent creations never hand out the same id.
        """
        async with self.lock.writer():
            song = Song(
                id=self._next_id(),
                title=new_song.title,
                artist=new_song.artist,
                genre=new_song.genre,
                play_count=0,
            )
            self._songs.append(song)
            return song.model_copy()

    async def search(
        self,
        title: Optional[str] = None,
        artist: Optional[str] = None,
        genre: Optional[str] = None,
    ) -> list[Song]:
        """Songs where every given query is a case-insensitive substring of its field."""
        async with self.lock.reader():
            return [
                song.model_copy()
                for song in self._songs
                if _matches(song.title, title)
                and _matches(song.artist, artist)
                and _matches(song.genre, genre)
            ]

    async def play(self, song_id: int) -> Optional[Song]:
        """Increment the play count of a song. Returns None for unknown ids."""
        async with self.lock.writer():
            for song in self._songs:
                if song.id == song_id:
                    song.play_count += 1
                    return song.model_copy()
            return None

    async def snapshot(self) -> list[Song]:
        """Point-in-time copy of the whole collection."""
        async with self.lock.reader():
            return [song.model_copy() for song in self._songs]
