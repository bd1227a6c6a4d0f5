"""Gamification Engine - Pure logic for achievement unlock evaluation.

This engine provides stateless, pure Python functions for:
- Building the observed-value context from tasks, creature and click window
- Evaluating locked achievements against their metric/threshold
- Detecting which achievements were newly unlocked by a transition

ARCHITECTURE: All functions are static methods that operate on passed-in data.
The coordinator is responsible for persistence and announcing unlocks.

MONOTONIC CONTRACT: evaluation only ever unlocks. An achievement whose
unlocked_at is set is passed through untouched, so re-evaluating after a task
is uncompleted or deleted never re-locks anything.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, TypedDict

from .. import const
from ..utils.dt_utils import as_utc, dt_now_iso
from .statistics_engine import StatisticsEngine

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from ..type_defs import AchievementData, CreatureData, TaskData


class EvaluationContext(TypedDict):
    """Observed values shared by every achievement in one evaluation pass."""

    tasks_completed: int
    tasks_created: int
    streak: int
    variety: int
    clicks: int
    recent_clicks: int


# Handler function signature: (context) -> observed value
MetricHandler = Callable[[EvaluationContext], int]


class GamificationEngine:
    """Pure logic engine for achievement evaluation.

    All methods are static - no instance state. This enables easy unit testing
    without any Home Assistant mocking.
    """

    # Maps achievement metric to the observed value it compares against
    _METRIC_HANDLERS: dict[str, MetricHandler] = {
        const.ACHIEVEMENT_METRIC_TASKS_COMPLETED: lambda ctx: ctx["tasks_completed"],
        const.ACHIEVEMENT_METRIC_TASKS_CREATED: lambda ctx: ctx["tasks_created"],
        const.ACHIEVEMENT_METRIC_STREAK: lambda ctx: ctx["streak"],
        const.ACHIEVEMENT_METRIC_VARIETY: lambda ctx: ctx["variety"],
        const.ACHIEVEMENT_METRIC_CLICKS: lambda ctx: ctx["clicks"],
        const.ACHIEVEMENT_METRIC_RECENT_CLICKS: lambda ctx: ctx["recent_clicks"],
    }

    # =========================================================================
    # CONTEXT
    # =========================================================================

    @staticmethod
    def build_context(
        tasks: Sequence[TaskData],
        creature: CreatureData,
        recent_clicks: int = 0,
        now: datetime | None = None,
    ) -> EvaluationContext:
        """Compute every observed value once for a full evaluation pass."""
        today = as_utc(now).date() if now else None
        return {
            "tasks_completed": StatisticsEngine.get_completed_count(tasks),
            "tasks_created": len(tasks),
            "streak": StatisticsEngine.get_current_streak(tasks, today),
            "variety": StatisticsEngine.get_unique_task_types(tasks),
            "clicks": creature.get(const.DATA_CREATURE_CLICK_COUNT, const.DEFAULT_ZERO),
            "recent_clicks": recent_clicks,
        }

    # =========================================================================
    # EVALUATION
    # =========================================================================

    @staticmethod
    def _valid_threshold(threshold: object) -> bool:
        return (
            isinstance(threshold, int)
            and not isinstance(threshold, bool)
            and threshold > 0
        )

    @classmethod
    def is_criteria_met(
        cls, achievement: AchievementData, context: EvaluationContext
    ) -> bool:
        """Return True if a locked achievement's rule is satisfied.

        A definition with an unknown metric or a threshold that is not a
        positive integer can never be met.
        """
        metric = achievement.get(const.DATA_ACHIEVEMENT_METRIC)
        threshold = achievement.get(const.DATA_ACHIEVEMENT_THRESHOLD)
        handler = cls._METRIC_HANDLERS.get(metric) if isinstance(metric, str) else None

        if handler is None or not cls._valid_threshold(threshold):
            const.LOGGER.debug(
                "DEBUG: Achievement '%s' has no usable rule (metric=%s, threshold=%s)",
                achievement.get(const.DATA_ACHIEVEMENT_ID),
                metric,
                threshold,
            )
            return False

        return handler(context) >= threshold  # type: ignore[operator]

    @classmethod
    def evaluate_achievements(
        cls,
        tasks: Sequence[TaskData],
        creature: CreatureData,
        achievements: Sequence[AchievementData],
        recent_clicks: int = 0,
        now: datetime | None = None,
    ) -> list[AchievementData]:
        """Return a new achievement list with newly satisfied rules unlocked.

        Args:
            tasks: Current task list.
            creature: Current creature counters.
            achievements: Current achievement state (catalog-merged).
            recent_clicks: Clicks inside the trailing window (procrastinator).
            now: Evaluation time; used for unlocked_at and "today".

        Returns:
            New list. Unchanged entries are returned as-is; newly unlocked
            entries are copies with unlocked_at set.
        """
        context = cls.build_context(tasks, creature, recent_clicks, now)
        unlocked_at = dt_now_iso(now)

        result: list[AchievementData] = []
        for achievement in achievements:
            if achievement.get(const.DATA_ACHIEVEMENT_UNLOCKED_AT) is not None:
                result.append(achievement)
                continue
            if cls.is_criteria_met(achievement, context):
                result.append({**achievement, "unlocked_at": unlocked_at})
            else:
                result.append(achievement)
        return result

    @staticmethod
    def get_newly_unlocked(
        before: Iterable[AchievementData], after: Iterable[AchievementData]
    ) -> list[str]:
        """Return ids locked in `before` and unlocked in `after`, in order."""
        previously_unlocked = {
            achievement.get(const.DATA_ACHIEVEMENT_ID)
            for achievement in before
            if achievement.get(const.DATA_ACHIEVEMENT_UNLOCKED_AT) is not None
        }
        return [
            achievement[const.DATA_ACHIEVEMENT_ID]
            for achievement in after
            if achievement.get(const.DATA_ACHIEVEMENT_UNLOCKED_AT) is not None
            and achievement.get(const.DATA_ACHIEVEMENT_ID) not in previously_unlocked
        ]
