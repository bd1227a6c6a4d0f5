"""Statistics Engine - Derived counters over the task list.

This engine centralizes every value the gamification layer observes:
- Completed task count (the creature's task_count)
- Current completion streak (consecutive UTC days)
- Variety (distinct task categories among completed tasks)
- Creature growth stage

Design Principles:
    - Stateless: operates on the task list passed in
    - Deterministic: "today" can be injected for testing
    - Tolerant: unparsable timestamps are ignored rather than raised
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import dt_now_utc, dt_utc_date

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..type_defs import TaskData


class StatisticsEngine:
    """Pure functions deriving statistics from tasks.

    All methods are static - no instance state.
    """

    @staticmethod
    def is_completed(task: TaskData) -> bool:
        """Return True when a task has a completion timestamp."""
        return task.get(const.DATA_TASK_COMPLETED_AT) is not None

    @staticmethod
    def get_completed_count(tasks: Iterable[TaskData]) -> int:
        """Count tasks with a non-null completed_at."""
        return sum(1 for task in tasks if StatisticsEngine.is_completed(task))

    @staticmethod
    def get_current_streak(
        tasks: Iterable[TaskData], today: date | None = None
    ) -> int:
        """Return the number of consecutive days with a completion.

        The streak is anchored to the most recent completion date, which must
        be today or yesterday (UTC). An older latest date means the streak has
        lapsed and 0 is returned even though completions exist.

        Args:
            tasks: Task list to analyze.
            today: Reference UTC date. Defaults to the current UTC date.

        Returns:
            Streak length in days (0 when there is no current streak).
        """
        completion_dates: set[date] = set()
        for task in tasks:
            completed_date = dt_utc_date(task.get(const.DATA_TASK_COMPLETED_AT))
            if completed_date is not None:
                completion_dates.add(completed_date)

        if not completion_dates:
            return 0

        reference = today or dt_now_utc().date()
        latest = max(completion_dates)
        if latest not in (reference, reference - timedelta(days=1)):
            return 0

        streak = 0
        cursor = latest
        while cursor in completion_dates:
            streak += 1
            cursor -= timedelta(days=1)
        return streak

    @staticmethod
    def get_unique_task_types(tasks: Iterable[TaskData]) -> int:
        """Count distinct task_type values among completed tasks."""
        return len(
            {
                task.get(const.DATA_TASK_TYPE)
                for task in tasks
                if StatisticsEngine.is_completed(task)
            }
        )

    @staticmethod
    def get_creature_stage(task_count: int) -> int:
        """Return the creature's growth stage (1-based) for a completed count.

        Stage N is reached once task_count meets the Nth threshold in
        const.CREATURE_STAGE_THRESHOLDS. Counts below the first threshold
        still report stage 1.
        """
        thresholds = const.CREATURE_STAGE_THRESHOLDS
        for index in range(len(thresholds) - 1, -1, -1):
            if task_count >= thresholds[index]:
                return index + 1
        return 1
