"""Keyed one-shot timers on the running asyncio loop.

Owners schedule delayed callbacks here so every timer can be canceled in one
place when the owner is torn down.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TimerHandle:
    """Timer token associated with a single key.

    Attributes:
        key: Name the owner scheduled the callback under.
        handle: Loop handle returned by ``call_later``.
    """

    key: str
    handle: asyncio.TimerHandle


class TaskScheduler:
    """Manage named one-shot callbacks on an asyncio loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()
        self._handles: dict[str, TimerHandle] = {}
        self._fired: set[str] = set()

    def schedule(self, key: str, delay_seconds: float, callback: Callable[[], None]) -> None:
        """Schedule or reschedule ``callback`` under ``key``.

        Args:
            key: Timer name; an existing timer with the same name is replaced.
            delay_seconds: Delay before the callback runs.
            callback: Zero-argument callable run on the loop.
        """
        self.cancel(key)
        self._fired.discard(key)
        handle = self._loop.call_later(max(0.0, delay_seconds), self._fire, key, callback)
        self._handles[key] = TimerHandle(key=key, handle=handle)

    def cancel(self, key: str) -> bool:
        """Cancel a pending timer. Returns False if nothing was pending."""
        timer = self._handles.pop(key, None)
        if timer is None:
            return False
        timer.handle.cancel()
        return True

    def cancel_all(self) -> None:
        for key in list(self._handles):
            self.cancel(key)

    def is_pending(self, key: str) -> bool:
        return key in self._handles

    def has_fired(self, key: str) -> bool:
        return key in self._fired

    def _fire(self, key: str, callback: Callable[[], None]) -> None:
        if self._handles.pop(key, None) is None:
            return
        self._fired.add(key)
        logger.debug("Running scheduled callback %s", key)
        callback()
