import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from song_library import __version__
from song_library.api.routes import router
from song_library.config import get_settings
from song_library.exceptions import SongNotFound
from song_library.services import SongLibrary, VisitCounter

logger = logging.getLogger(__name__)


def create_app(
    library: Optional[SongLibrary] = None,
    counter: Optional[VisitCounter] = None,
) -> FastAPI:
    """
    Build the HTTP app around the given shared state.

    The library and counter live on ``app.state`` and reach the handlers
    through dependencies, so every request of one app sees the same objects.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="In-memory song library and visit counter",
        version=__version__,
        debug=settings.debug,
        redirect_slashes=False,
    )
    app.state.library = library if library is not None else SongLibrary()
    app.state.counter = counter if counter is not None else VisitCounter()

    # Exception handlers
    @app.exception_handler(SongNotFound)
    async def song_not_found_handler(request: Request, exc: SongNotFound):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
        )

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError):
        logger.debug(f"Rejected body for {request.url.path}: {exc.errors()}")
        return PlainTextResponse("Invalid JSON", status_code=status.HTTP_400_BAD_REQUEST)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and known paths with the wrong method are both "not found"
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return PlainTextResponse("Not Found", status_code=status.HTTP_404_NOT_FOUND)
        return PlainTextResponse(
            str(exc.detail),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    # Include routes
    app.include_router(router)

    return app
