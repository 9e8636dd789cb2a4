"""
Flat-file persistence for the song library.

The whole collection is stored as one JSON array of song objects and is
rewritten in full on every save. Both directions are best effort: a missing or
corrupt file loads as an empty library, and a failed save is logged and
reported through the return value, never raised.
"""
import asyncio
import logging
from pathlib import Path
from typing import Sequence, Union

from pydantic import TypeAdapter, ValidationError

from song_library.schemas import Song

logger = logging.getLogger(__name__)

SongList = TypeAdapter(list[Song])


class SongStorage:
    """Loader/persister for a fixed JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def load(self) -> list[Song]:
        """Read the library file. Returns an empty list if it is absent or malformed."""
        try:
            raw = await asyncio.to_thread(self.path.read_bytes)
        except FileNotFoundError:
            logger.debug(f"No library file at {self.path}, starting empty")
            return []
        except OSError as e:
            logger.warning(f"Could not read {self.path}: {e}")
            return []

        try:
            songs = SongList.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                f"Ignoring malformed library file {self.path} "
                f"({e.error_count()} errors)"
            )
            return []

        logger.info(f"Loaded {len(songs)} songs from {self.path}")
        return songs

    async def save(self, songs: Sequence[Song]) -> bool:
        """Overwrite the library file with the given songs. Never raises."""
        try:
            data = SongList.dump_json(list(songs))
        except Exception as e:
            logger.error(f"Failed to serialize library: {e}")
            return False

        try:
            await asyncio.to_thread(self._write, data)
        except OSError as e:
            logger.error(f"Failed to save library to {self.path}: {e}")
            return False

        logger.info(f"Saved {len(songs)} songs to {self.path}")
        return True

    def _write(self, data: bytes) -> None:
        tmp_file = self.path.with_name(self.path.name + ".tmp")
        tmp_file.write_bytes(data)
        tmp_file.replace(self.path)
