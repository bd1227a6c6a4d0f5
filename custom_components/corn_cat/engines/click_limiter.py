"""Click Rate Limiter - Sliding-window click counter with a timed lockout.

States:
    normal   -> clicks are accepted and recorded in the trailing window
    punished -> clicks are rejected until the punishment period elapses

Transitions:
    normal --(window count reaches allowance)--> punished
    punished --(period elapsed, on tick or click)--> normal (window cleared)
    any --(task completed: reset)--> normal (window cleared)

The allowance grows with the creature: 30 clicks plus 10 per completed task.
The click that reaches the allowance is itself accepted and counted.

This class holds runtime-only state (nothing here is persisted) and never
reads the clock itself; every method takes `now`.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime, timedelta

from .. import const
from ..utils.dt_utils import dt_seconds_until


@dataclass(frozen=True)
class ClickDecision:
    """Outcome of one click attempt."""

    accepted: bool
    recent_clicks: int
    allowance: int
    punishment_started: bool = False


@dataclass(frozen=True)
class ClickStatus:
    """Snapshot for display: state, window usage and remaining lockout."""

    state: str
    clicks_used: int
    allowance: int
    seconds_left: int


class ClickRateLimiter:
    """Sliding-window rate limiter for creature clicks."""

    def __init__(
        self,
        window: timedelta = timedelta(seconds=const.CLICK_WINDOW_SECONDS),
        punishment: timedelta = timedelta(seconds=const.CLICK_PUNISHMENT_SECONDS),
    ) -> None:
        self._window = window
        self._punishment = punishment
        self._clicks: deque[datetime] = deque()
        self._punishment_end: datetime | None = None

    @staticmethod
    def allowance(task_count: int) -> int:
        """Return the number of clicks allowed per window."""
        return const.CLICK_BASE_ALLOWANCE + const.CLICK_ALLOWANCE_PER_TASK * max(
            task_count, 0
        )

    @property
    def punishment_end(self) -> datetime | None:
        """Return the end of the current punishment period, if any."""
        return self._punishment_end

    def is_punished(self, now: datetime) -> bool:
        """Return True while a punishment period is running."""
        return self._punishment_end is not None and now < self._punishment_end

    def state(self, now: datetime) -> str:
        """Return the limiter state at `now`."""
        if self.is_punished(now):
            return const.CLICK_STATE_PUNISHED
        return const.CLICK_STATE_NORMAL

    def recent_clicks(self, now: datetime) -> int:
        """Return the number of recorded clicks inside the window."""
        self._prune(now)
        return len(self._clicks)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def check_click(self, now: datetime, task_count: int) -> ClickDecision:
        """Return what record_click would decide at `now`, recording nothing."""
        allowance = self.allowance(task_count)
        if self.is_punished(now):
            return ClickDecision(
                accepted=False,
                recent_clicks=len(self._clicks),
                allowance=allowance,
            )

        if self._punishment_end is not None:
            # Elapsed punishment: the window is cleared before this click.
            recent_clicks = 1
        else:
            window_start = now - self._window
            recent_clicks = 1 + sum(1 for click in self._clicks if click > window_start)

        return ClickDecision(
            accepted=True,
            recent_clicks=recent_clicks,
            allowance=allowance,
            punishment_started=recent_clicks >= allowance,
        )

    def record_click(self, now: datetime, task_count: int) -> ClickDecision:
        """Try to record a click at `now`.

        A rejected click (punishment still running) mutates nothing.
        """
        decision = self.check_click(now, task_count)
        if not decision.accepted:
            return decision

        self._expire_punishment(now)
        self._prune(now)
        self._clicks.append(now)

        if decision.punishment_started:
            self._punishment_end = now + self._punishment
            const.LOGGER.info(
                "INFO: Click allowance of %s reached, clicks locked until %s",
                decision.allowance,
                self._punishment_end.isoformat(),
            )
        return decision

    def tick(self, now: datetime) -> bool:
        """Prune the window and expire a finished punishment.

        Returns True if the state moved from punished to normal.
        """
        expired = self._expire_punishment(now)
        self._prune(now)
        return expired

    def reset(self) -> None:
        """Return to normal with an empty window (a task was completed)."""
        if self._punishment_end is not None:
            const.LOGGER.debug("DEBUG: Click punishment lifted by task completion")
        self._clicks.clear()
        self._punishment_end = None

    def status(self, now: datetime, task_count: int) -> ClickStatus:
        """Return a display snapshot without changing state."""
        window_start = now - self._window
        clicks_used = sum(1 for click in self._clicks if click > window_start)
        return ClickStatus(
            state=self.state(now),
            clicks_used=clicks_used,
            allowance=self.allowance(task_count),
            seconds_left=(
                dt_seconds_until(self._punishment_end, now)
                if self.is_punished(now)
                else 0
            ),
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _prune(self, now: datetime) -> None:
        window_start = now - self._window
        while self._clicks and self._clicks[0] <= window_start:
            self._clicks.popleft()

    def _expire_punishment(self, now: datetime) -> bool:
        if self._punishment_end is None or now < self._punishment_end:
            return False
        const.LOGGER.debug("DEBUG: Click punishment expired")
        self._punishment_end = None
        self._clicks.clear()
        return True
