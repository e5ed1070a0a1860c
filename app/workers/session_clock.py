import asyncio
import time

from loguru import logger

from app.domain.studio.session.session_controller import SessionController


class SessionClock:
    """Background task driving the elapsed counter of a session.

    Wall time is measured with a monotonic clock and converted to whole
    seconds; fractions carry over to the next wake-up.
    """

    def __init__(self, controller: SessionController, interval: float = 1.0):
        self.controller = controller
        self.interval = interval
        self._task: asyncio.Task | None = None
        self._carry = 0.0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="session-clock")
        logger.info(f"Session clock started (interval={self.interval}s)")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Session clock stopped")

    def advance(self, delta: float) -> int:
        """Feed wall time into the controller; returns whole seconds ticked."""
        self._carry += delta
        whole = int(self._carry)
        self._carry -= whole
        if whole:
            self.controller.tick(whole)
        return whole

    async def _run(self) -> None:
        last = time.monotonic()
        while True:
            await asyncio.sleep(self.interval)
            now = time.monotonic()
            try:
                self.advance(now - last)
            except Exception:
                logger.exception("Session clock tick failed")
            last = now
