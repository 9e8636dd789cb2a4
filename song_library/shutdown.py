import asyncio
import logging
import signal
from typing import Optional

from song_library.services import SongLibrary, SongStorage

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownCoordinator:
    """
    Waits for SIGINT or SIGTERM and writes the library to disk exactly once.
    """

    def __init__(self, library: SongLibrary, storage: SongStorage):
        self.library = library
        self.storage = storage
        self.received: Optional[signal.Signals] = None
        self._requested = asyncio.Event()
        self._flush_lock = asyncio.Lock()
        self._flushed = False

    @property
    def flushed(self) -> bool:
        return self._flushed

    def install(self, loop: asyncio.AbstractEventLoop) -> None:
        """Route termination signals to this coordinator."""
        for sig in SHUTDOWN_SIGNALS:
            loop.add_signal_handler(sig, self.trigger, sig)

    def uninstall(self, loop: asyncio.AbstractEventLoop) -> None:
        for sig in SHUTDOWN_SIGNALS:
            loop.remove_signal_handler(sig)

    def trigger(self, sig: signal.Signals = signal.SIGTERM) -> None:
        """Request shutdown. Only the first signal counts."""
        if self.received is not None:
            logger.info(f"Already shutting down, ignoring {signal.Signals(sig).name}")
            return
        self.received = signal.Signals(sig)
        logger.info(f"Received {self.received.name}, saving library")
        self._requested.set()

    async def wait(self) -> None:
        """Block until a shutdown is requested, then flush."""
        await self._requested.wait()
        await self.flush()

    async def flush(self) -> bool:
        """Save the current library once. Later calls are no-ops."""
        async with self._flush_lock:
            if self._flushed:
                return False
            self._flushed = True
            songs = await self.library.snapshot()
            await self.storage.save(songs)
            return True
