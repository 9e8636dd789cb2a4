import re

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from song_library.exceptions import InvalidSongId, SongIdMissing
from song_library.schemas import NewSong
from song_library.services import SongLibrary, VisitCounter

# Decimal digits with an optional leading plus, as an unsigned integer parse allows
_UNSIGNED = re.compile(r"\+?[0-9]+")


def get_library(request: Request) -> SongLibrary:
    """Get the song library attached to the running app."""
    return request.app.state.library


def get_counter(request: Request) -> VisitCounter:
    """Get the visit counter attached to the running app."""
    return request.app.state.counter


async def read_new_song(request: Request) -> NewSong:
    """
    Parse the request body as a new song.

    The body is decoded as JSON whatever Content-Type the client sent, so
    `curl -d '{...}'` (form-encoded header) works the same as a JSON client.
    """
    body = await request.body()
    try:
        return NewSong.model_validate_json(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


def parse_song_id(raw_id: str) -> int:
    """Parse the trailing path segment of a play request as an unsigned id."""
    if not raw_id:
        raise SongIdMissing()
    if not _UNSIGNED.fullmatch(raw_id):
        raise InvalidSongId()
    return int(raw_id)
