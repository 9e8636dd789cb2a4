import asyncio


class VisitCounter:
    """Service for the visit counter. Every access, reads included, is exclusive."""

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError("visit count cannot be negative")
        self._count = start
        self._lock = asyncio.Lock()

    async def increment(self) -> int:
        """Add one visit. Returns the new count."""
        async with self._lock:
            self._count += 1
            return self._count

    async def value(self) -> int:
        """Get the current count."""
        async with self._lock:
            return self._count
