"""
Song library server entry point.

Loads the library, serves HTTP with uvicorn and, on SIGINT or SIGTERM, saves
the library once before exiting.

Run with:
    song-library
or:
    python -m song_library
"""
import asyncio
import contextlib
import logging
from typing import Optional

import uvicorn

from song_library.config import Settings, get_settings
from song_library.main import create_app
from song_library.services import SongLibrary, SongStorage, VisitCounter
from song_library.shutdown import ShutdownCoordinator

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LibraryServer(uvicorn.Server):
    """uvicorn server that leaves signal handling to the shutdown coordinator."""

    @contextlib.contextmanager
    def capture_signals(self):
        yield


async def serve(settings: Optional[Settings] = None) -> bool:
    """
    Run until the server fails or a shutdown signal has been handled.

    Returns True for a clean, signal-driven shutdown.
    """
    settings = settings or get_settings()

    storage = SongStorage(settings.data_file)
    library = SongLibrary(await storage.load())
    app = create_app(library, VisitCounter())

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
    server = LibraryServer(config)

    loop = asyncio.get_running_loop()
    coordinator = ShutdownCoordinator(library, storage)
    coordinator.install(loop)

    logger.info(f"Listening on {settings.host}:{settings.port} with {len(library)} songs")

    server_task = asyncio.create_task(server.serve(), name="server")
    watcher_task = asyncio.create_task(coordinator.wait(), name="shutdown-watcher")

    try:
        done, _ = await asyncio.wait(
            {server_task, watcher_task},
            return_when=asyncio.FIRST_COMPLETED,
        )

        if watcher_task in done:
            # Library is on disk; stop accepting and let uvicorn wind down
            server.should_exit = True
            await server_task
            return True

        watcher_task.cancel()
        exc = server_task.exception()
        if exc is not None:
            logger.error(f"Server error: {exc}", exc_info=exc)
        else:
            logger.error("Server stopped unexpectedly")
        return False
    finally:
        coordinator.uninstall(loop)


def main() -> int:
    """Console entry point."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    ok = asyncio.run(serve(settings))
    return 0 if ok else 1
