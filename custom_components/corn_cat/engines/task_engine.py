"""Task Engine - Pure logic for task and creature state transitions.

This engine provides stateless, pure Python functions for:
- Creating tasks
- Toggling task completion
- Deleting tasks
- Clicking the creature

Every transition takes the prior (tasks, creature, achievements), never
mutates them, and returns a TransitionResult holding the new state, the ids of
achievements it unlocked and whether anything changed. The caller decides
whether to persist based on `changed` (the explicit commit step).

INVARIANT: after every transition creature.task_count equals the number of
completed tasks. It is always recomputed from the list, never adjusted by a
delta.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING
import uuid

from .. import const
from ..utils.dt_utils import dt_now_iso, dt_now_utc
from .gamification_engine import GamificationEngine
from .statistics_engine import StatisticsEngine

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..type_defs import AchievementData, CreatureData, TaskData


# =============================================================================
# TRANSITION RESULT DATA STRUCTURE
# =============================================================================


@dataclass
class TransitionResult:
    """Outcome of a single engine transition.

    Attributes:
        tasks: New task list
        creature: New creature counters
        achievements: New achievement state
        newly_unlocked: Ids of achievements unlocked by this transition
        changed: Whether the transition altered any persisted state
        completed: Whether a task moved into the completed state
            (the click limiter's escape valve)
    """

    tasks: list[TaskData]
    creature: CreatureData
    achievements: list[AchievementData]
    newly_unlocked: list[str] = field(default_factory=list)
    changed: bool = False
    completed: bool = False


# =============================================================================
# TASK ENGINE
# =============================================================================


class TaskEngine:
    """Pure logic engine for task/creature transitions.

    All methods are static - no instance state.
    """

    @staticmethod
    def _with_task_count(
        creature: CreatureData, tasks: Sequence[TaskData]
    ) -> CreatureData:
        return {
            **creature,
            "task_count": StatisticsEngine.get_completed_count(tasks),
        }

    @staticmethod
    def _unchanged(
        tasks: Sequence[TaskData],
        creature: CreatureData,
        achievements: Sequence[AchievementData],
    ) -> TransitionResult:
        """Result for a transition aimed at an unknown task."""
        return TransitionResult(
            tasks=list(tasks), creature=creature, achievements=list(achievements)
        )

    @staticmethod
    def _finish(
        tasks: list[TaskData],
        creature: CreatureData,
        achievements: Sequence[AchievementData],
        *,
        changed: bool,
        recent_clicks: int = 0,
        completed: bool = False,
        now: datetime | None = None,
    ) -> TransitionResult:
        """Re-evaluate achievements and package the result."""
        updated_achievements = GamificationEngine.evaluate_achievements(
            tasks,
            creature,
            achievements,
            recent_clicks,
            now,
        )
        newly_unlocked = GamificationEngine.get_newly_unlocked(
            achievements, updated_achievements
        )
        return TransitionResult(
            tasks=tasks,
            creature=creature,
            achievements=updated_achievements,
            newly_unlocked=newly_unlocked,
            changed=changed or bool(newly_unlocked),
            completed=completed,
        )

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    @staticmethod
    def create_task(
        tasks: Sequence[TaskData],
        creature: CreatureData,
        achievements: Sequence[AchievementData],
        title: str,
        task_type: str = const.DEFAULT_TASK_TYPE,
        now: datetime | None = None,
    ) -> TransitionResult:
        """Add a new open task at the front of the list.

        Raises:
            ValueError: If the title is empty after trimming.
        """
        clean_title = (title or "").strip()
        if not clean_title:
            raise ValueError(const.ERROR_EMPTY_TITLE)
        if task_type not in const.TASK_TYPE_OPTIONS:
            const.LOGGER.debug(
                "DEBUG: Unknown task type '%s', using '%s'",
                task_type,
                const.DEFAULT_TASK_TYPE,
            )
            task_type = const.DEFAULT_TASK_TYPE

        new_task: TaskData = {
            "id": uuid.uuid4().hex,
            "title": clean_title,
            "task_type": task_type,
            "created_at": dt_now_iso(now),
            "completed_at": None,
        }
        updated_tasks = [new_task, *tasks]
        return TaskEngine._finish(
            updated_tasks,
            TaskEngine._with_task_count(creature, updated_tasks),
            achievements,
            changed=True,
            now=now,
        )

    @staticmethod
    def complete_task(
        tasks: Sequence[TaskData],
        creature: CreatureData,
        achievements: Sequence[AchievementData],
        task_id: str,
        now: datetime | None = None,
    ) -> TransitionResult:
        """Toggle a task's completion.

        An open task gets completed_at = now; a completed task is reopened.
        An unknown task_id leaves tasks untouched (changed=False).
        """
        now = now or dt_now_utc()
        found = False
        completed = False
        updated_tasks: list[TaskData] = []
        for task in tasks:
            if task.get(const.DATA_TASK_ID) != task_id:
                updated_tasks.append(task)
                continue
            found = True
            if StatisticsEngine.is_completed(task):
                updated_tasks.append({**task, "completed_at": None})
            else:
                completed = True
                updated_tasks.append({**task, "completed_at": dt_now_iso(now)})

        if not found:
            const.LOGGER.debug("DEBUG: Complete Task - Task ID '%s' not found", task_id)
            return TaskEngine._unchanged(tasks, creature, achievements)

        return TaskEngine._finish(
            updated_tasks,
            TaskEngine._with_task_count(creature, updated_tasks),
            achievements,
            changed=True,
            completed=completed,
            now=now,
        )

    @staticmethod
    def delete_task(
        tasks: Sequence[TaskData],
        creature: CreatureData,
        achievements: Sequence[AchievementData],
        task_id: str,
        now: datetime | None = None,
    ) -> TransitionResult:
        """Remove a task.

        The creature's task_count is recomputed only when the removed task was
        completed; otherwise the creature is returned unchanged.
        """
        removed = next(
            (task for task in tasks if task.get(const.DATA_TASK_ID) == task_id), None
        )
        if removed is None:
            const.LOGGER.debug("DEBUG: Delete Task - Task ID '%s' not found", task_id)
            return TaskEngine._unchanged(tasks, creature, achievements)

        updated_tasks = [
            task for task in tasks if task.get(const.DATA_TASK_ID) != task_id
        ]
        updated_creature = (
            TaskEngine._with_task_count(creature, updated_tasks)
            if StatisticsEngine.is_completed(removed)
            else creature
        )
        return TaskEngine._finish(
            updated_tasks, updated_creature, achievements, changed=True, now=now
        )

    @staticmethod
    def click_creature(
        creature: CreatureData,
        achievements: Sequence[AchievementData],
        recent_clicks: int = 0,
        now: datetime | None = None,
    ) -> TransitionResult:
        """Count one click on the creature.

        click_count always increases by exactly one; punishment gating is the
        caller's job. Task-based achievements are evaluated against an empty
        task list, so a click can only unlock click or procrastinator ones.
        The returned TransitionResult.tasks is empty; callers keep their own
        task list.
        """
        updated_creature: CreatureData = {
            **creature,
            "click_count": creature.get(const.DATA_CREATURE_CLICK_COUNT, 0) + 1,
        }
        return TaskEngine._finish(
            [],
            updated_creature,
            achievements,
            changed=True,
            recent_clicks=recent_clicks,
            now=now,
        )
