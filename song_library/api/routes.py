from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from song_library.api.deps import get_counter, get_library, parse_song_id, read_new_song
from song_library.exceptions import SongNotFound
from song_library.schemas import ErrorResponse, NewSong, Song
from song_library.services import SongLibrary, VisitCounter

WELCOME_MESSAGE = "Welcome to the song library server!"

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def welcome():
    """Static welcome text."""
    return WELCOME_MESSAGE


@router.get("/count", response_class=PlainTextResponse)
async def count_visit(counter: VisitCounter = Depends(get_counter)):
    """
    Count this visit and report the running total.
    """
    count = await counter.increment()
    return f"Visit count: {count}"


@router.post(
    "/songs/new",
    response_model=Song,
    responses={400: {"description": "Invalid JSON"}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": NewSong.model_json_schema()}},
        }
    },
)
async def create_song(
    new_song: NewSong = Depends(read_new_song),
    library: SongLibrary = Depends(get_library),
):
    """
    Add a song with the next free id and a play count of zero.
    """
    return await library.add(new_song)


@router.get("/songs/search", response_model=list[Song])
async def search_songs(
    title: Optional[str] = Query(default=None, description="Title substring"),
    artist: Optional[str] = Query(default=None, description="Artist substring"),
    genre: Optional[str] = Query(default=None, description="Genre substring"),
    library: SongLibrary = Depends(get_library),
):
    """
    Search songs. Every given filter is a case-insensitive substring match;
    omitted filters match everything.
    """
    return await library.search(title=title, artist=artist, genre=genre)


@router.get(
    "/songs/play/{raw_id:path}",
    response_model=Song,
    responses={
        400: {"description": "Missing or invalid song ID"},
        404: {"model": ErrorResponse, "description": "Song not found"},
    },
)
async def play_song(
    raw_id: str,
    library: SongLibrary = Depends(get_library),
):
    """
    Play a song, incrementing its play count by one.
    """
    song_id = parse_song_id(raw_id)
    song = await library.play(song_id)
    if song is None:
        raise SongNotFound(song_id)
    return song
