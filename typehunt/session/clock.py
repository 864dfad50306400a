"""
Session Clock - Fixed-rate countdown for a running session.

Independent of the render loop and the detector: one tick per
second no matter how slow detection is. Reaching zero calls
on_expired exactly once. cancel() is safe to call any number of
times, and a cancelled clock never fires again.
"""

from __future__ import annotations
from collections.abc import Callable
import asyncio
import logging

from .state import Session

logger = logging.getLogger(__name__)


class SessionClock:
    """
    1 Hz countdown driving session.remaining_seconds.

    Usage:
        clock = SessionClock(session, on_expired=controller.on_timeout)
        clock.start()   # inside a running event loop
        ...
        clock.cancel()
    """

    def __init__(
        self,
        session: Session,
        on_expired: Callable[[], None],
        on_tick: Callable[[int], None] | None = None,
        tick_seconds: float = 1.0,
    ):
        self.session = session
        self.on_expired = on_expired
        self.on_tick = on_tick
        self.tick_seconds = tick_seconds

        self._active = False
        self._task: asyncio.Task | None = None

    @property
    def active(self) -> bool:
        return self._active

    def arm(self) -> None:
        """Allow tick() to count down without starting a task."""
        self._active = True

    def start(self) -> None:
        """Arm the clock and schedule its task on the running loop."""
        self.cancel()
        self.arm()
        self._task = asyncio.get_running_loop().create_task(self._run())

    def tick(self) -> None:
        """
        One countdown step.

        The final step calls on_expired instead of on_tick, so no
        listener sees a running session with zero seconds left.
        """
        if not self._active:
            return

        session = self.session
        session.remaining_seconds = max(0, session.remaining_seconds - 1)

        if session.remaining_seconds <= 0:
            self._active = False
            logger.info("Countdown reached zero")
            self.on_expired()
        elif self.on_tick:
            self.on_tick(session.remaining_seconds)

    def cancel(self) -> None:
        self._active = False
        task, self._task = self._task, None
        if task is not None and not task.done() and task is not _current_task():
            task.cancel()

    async def _run(self) -> None:
        while self._active:
            await asyncio.sleep(self.tick_seconds)
            self.tick()


def _current_task() -> asyncio.Task | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None
