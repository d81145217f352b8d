"""Read/Write Lock — asyncio reader/writer mutual exclusion.

Invariants:
    - Any number of readers OR exactly one writer hold the lock at a time
    - Writer-preferring: once a writer waits, new readers queue behind it
    - A task cancelled while waiting leaves counters consistent
    - Release updates counters before any await; a task cancelled while
      releasing still frees the lock and its wake-up still reaches waiters

Design Decisions:
    - Built on asyncio.Condition: one event loop, no threads, no busy-waiting
    - Context managers (read()/write()) over acquire/release pairs: release
      cannot be forgotten on an exception path
    - Release wake-up runs under asyncio.shield: cancelling the releasing
      task cannot drop the notify_all waiting writers depend on
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class ReadWriteLock:
    """Shared/exclusive lock for coroutines on a single event loop."""

    def __init__(self) -> None:
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
    async def read(self) -> AsyncIterator[None]:
        """Shared access. Blocks while a writer holds or awaits the lock."""
        async with self._cond:
            await self._cond.wait_for(
                lambda: not self._writer and not self._writers_waiting,
            )
            self._readers += 1
        try:
            yield
        finally:
            self._readers -= 1
            if not self._readers:
                await asyncio.shield(self._wake_waiters())

    @asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        """Exclusive access for the whole block."""
        async with self._cond:
            self._writers_waiting += 1
            try:
                await self._cond.wait_for(
                    lambda: not self._writer and not self._readers,
                )
            finally:
                self._writers_waiting -= 1
                # readers parked behind a cancelled writer must re-check
                self._cond.notify_all()
            self._writer = True
        try:
            yield
        finally:
            self._writer = False
            await asyncio.shield(self._wake_waiters())

    async def _wake_waiters(self) -> None:
        async with self._cond:
            self._cond.notify_all()
