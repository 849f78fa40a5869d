from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.formatters import format_elapsed
from ..core.constants import LIVE_TICK_SECONDS
from ..core.enums import TrackerState
from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

ZERO_DISPLAY = "00:00:00"


class LiveElapsedTracker:
    """Live ``HH:MM:SS`` counter for the currently open work session.

    INACTIVE -> ACTIVE on clock-in (or `resume` after a reload), back to INACTIVE
    on clock-out. ON_BREAK only overlays ACTIVE for display: the counter keeps
    running and durations are not reduced.

    The tick is an asyncio task that exists only while a session is open, its
    start is known and a view is attached. Methods that may start it must be
    called from inside the running loop.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = now_local,
        tick_seconds: float = LIVE_TICK_SECONDS,
        on_tick: Optional[Callable[[str], None]] = None,
    ):
        self._clock = clock
        self._tick_seconds = float(tick_seconds)
        self._on_tick = on_tick

        self._active = False
        self._on_break = False
        self._anchor: Optional[datetime] = None
        self._view_attached = False
        self._task: Optional[asyncio.Task] = None
        self._last_display = ZERO_DISPLAY

    @property
    def state(self) -> TrackerState:
        if not self._active:
            return TrackerState.INACTIVE
        return TrackerState.ON_BREAK if self._on_break else TrackerState.ACTIVE

    @property
    def anchor(self) -> Optional[datetime]:
        return self._anchor

    @property
    def is_ticking(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def last_display(self) -> str:
        return self._last_display

    def clock_in(self, anchor: datetime) -> None:
        if self._active:
            raise ValidationError("You are already clocked in")
        self._active = True
        self._on_break = False
        self._anchor = anchor
        logger.info("tracker active since %s", anchor.isoformat())
        self._sync_ticker()

    def clock_out(self) -> None:
        if not self._active:
            raise ValidationError("You are already clocked out")
        self._active = False
        self._on_break = False
        self._anchor = None
        self._last_display = ZERO_DISPLAY
        logger.info("tracker inactive")
        self._sync_ticker()

    def resume(self, anchor: Optional[datetime]) -> None:
        """Re-enter ACTIVE from state reconstructed after a reload.

        `anchor` is the start of today's open session, or None when the server
        reports IN but no open session exists today; the counter then stays at zero.
        """
        if anchor != self._anchor:
            self._on_break = False
        self._active = True
        self._anchor = anchor
        self._sync_ticker()

    def reset(self) -> None:
        """Drop to INACTIVE without requiring an active session (server says OUT)."""
        if self._active:
            self.clock_out()

    def start_break(self) -> None:
        if self.state != TrackerState.ACTIVE:
            raise ValidationError("A break can only start while clocked in")
        self._on_break = True

    def end_break(self) -> None:
        if self.state != TrackerState.ON_BREAK:
            raise ValidationError("No break in progress")
        self._on_break = False

    def toggle_break(self) -> TrackerState:
        if self.state == TrackerState.ON_BREAK:
            self.end_break()
        else:
            self.start_break()
        return self.state

    def elapsed(self, now: Optional[datetime] = None) -> timedelta:
        if not self._active or self._anchor is None:
            return timedelta(0)
        return max((now or self._clock()) - self._anchor, timedelta(0))

    def display(self, now: Optional[datetime] = None) -> str:
        if not self._active or self._anchor is None:
            return ZERO_DISPLAY
        return format_elapsed(self._anchor, now or self._clock())

    def attach_view(self) -> None:
        self._view_attached = True
        self._sync_ticker()

    def detach_view(self) -> None:
        self._view_attached = False
        self._sync_ticker()

    async def close(self) -> None:
        """Detach the view and wait for the tick task to finish cancelling."""
        task = self._task
        self.detach_view()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def _should_tick(self) -> bool:
        return self._view_attached and self._active and self._anchor is not None

    def _sync_ticker(self) -> None:
        if self._should_tick():
            if not self.is_ticking:
                self._task = asyncio.get_running_loop().create_task(self._run())
            return

        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _run(self) -> None:
        while True:
            try:
                self._publish()
            except Exception:
                logger.exception("tick callback failed")
            await asyncio.sleep(self._tick_seconds)

    def _publish(self) -> None:
        self._last_display = self.display()
        if self._on_tick is not None:
            self._on_tick(self._last_display)
