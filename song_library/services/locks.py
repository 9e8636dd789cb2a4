import asyncio
from contextlib import asynccontextmanager


class ReadWriteLock:
    """
    Asyncio reader/writer lock.

    Any number of readers may hold the lock together; a writer holds it alone.
    Once a writer is waiting, new readers queue behind it so a steady stream
    of searches cannot starve song creation or play updates.
    """

    def __init__(self):
        self._cond = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def writer_active(self) -> bool:
        return self._writer

    @asynccontextmanager
    async def reader(self):
        """Hold the lock in shared mode."""
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and self._writers_waiting == 0
            )
            self._readers += 1
        try:
            yield
        finally:
            async with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @asynccontextmanager
    async def writer(self):
        """Hold the lock exclusively."""
        async with self._cond:
            self._writers_waiting += 1
            acquired = False
            try:
                await self._cond.wait_for(
                    lambda: not self._writer and self._readers == 0
                )
                acquired = True
            finally:
                self._writers_waiting -= 1
                if not acquired:
                    # Readers queued behind a cancelled writer may proceed
                    self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            async with self._cond:
                self._writer = False
                self._cond.notify_all()
