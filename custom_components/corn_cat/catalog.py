# File: catalog.py
"""Static achievement catalog for the Corn Cat integration.

The catalog is the SINGLE SOURCE OF TRUTH for achievement metadata. The save
document only contributes each achievement's unlocked_at timestamp; titles,
icons and unlock rules always come from here (see reconcile_achievements).

Each definition carries its unlock rule as explicit fields:
- metric: which observed value is compared (see const.ACHIEVEMENT_METRIC_*)
- threshold: the value the metric must reach

The id keeps its conventional "<kind>-<N>" shape for stable persistence, but
is never parsed to derive the rule.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from . import const

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .type_defs import AchievementData, AchievementDefinition


def _achievement(
    achievement_id: str,
    title: str,
    description: str,
    category: str,
    icon: str,
    metric: str,
    threshold: int,
) -> AchievementDefinition:
    return {
        "id": achievement_id,
        "title": title,
        "description": description,
        "category": category,
        "icon": icon,
        "metric": metric,
        "threshold": threshold,
    }


_TASKS = const.ACHIEVEMENT_CATEGORY_TASKS
_STREAKS = const.ACHIEVEMENT_CATEGORY_STREAKS
_VARIETY = const.ACHIEVEMENT_CATEGORY_VARIETY
_CLICKS = const.ACHIEVEMENT_CATEGORY_CLICKS
_PROCRASTINATOR = const.ACHIEVEMENT_CATEGORY_PROCRASTINATOR

_COMPLETED = const.ACHIEVEMENT_METRIC_TASKS_COMPLETED
_CREATED = const.ACHIEVEMENT_METRIC_TASKS_CREATED

ACHIEVEMENT_CATALOG: tuple[AchievementDefinition, ...] = (
    # Task completion
    _achievement("tasks-completed-1", "First Task", "Complete your first task", _TASKS, "✅", _COMPLETED, 1),
    _achievement("tasks-completed-5", "Getting Started", "Complete 5 tasks", _TASKS, "🎯", _COMPLETED, 5),
    _achievement("tasks-completed-10", "Task Master", "Complete 10 tasks", _TASKS, "🏆", _COMPLETED, 10),
    _achievement("tasks-completed-25", "Productivity Pro", "Complete 25 tasks", _TASKS, "⭐", _COMPLETED, 25),
    _achievement("tasks-completed-50", "Task Champion", "Complete 50 tasks", _TASKS, "👑", _COMPLETED, 50),
    _achievement("tasks-completed-100", "Task Legend", "Complete 100 tasks", _TASKS, "💎", _COMPLETED, 100),
    _achievement("tasks-completed-200", "Task God", "Complete 200 tasks", _TASKS, "🌟", _COMPLETED, 200),
    # Task creation
    _achievement("tasks-created-1", "Task Creator", "Create your first task", _TASKS, "📝", _CREATED, 1),
    _achievement("tasks-created-5", "Planner", "Create 5 tasks", _TASKS, "📋", _CREATED, 5),
    _achievement("tasks-created-10", "Organizer", "Create 10 tasks", _TASKS, "🗂️", _CREATED, 10),
    _achievement("tasks-created-25", "Task Manager", "Create 25 tasks", _TASKS, "📊", _CREATED, 25),
    _achievement("tasks-created-50", "Task Architect", "Create 50 tasks", _TASKS, "🏗️", _CREATED, 50),
    _achievement("tasks-created-100", "Task Designer", "Create 100 tasks", _TASKS, "🎨", _CREATED, 100),
    # Streaks
    _achievement("streak-2", "Two Day Wonder", "Complete tasks for 2 consecutive days", _STREAKS, "🔥", const.ACHIEVEMENT_METRIC_STREAK, 2),
    _achievement("streak-3", "Three Day Streak", "Complete tasks for 3 consecutive days", _STREAKS, "🔥🔥", const.ACHIEVEMENT_METRIC_STREAK, 3),
    _achievement("streak-7", "Week Warrior", "Complete tasks for 7 consecutive days", _STREAKS, "🔥🔥🔥", const.ACHIEVEMENT_METRIC_STREAK, 7),
    _achievement("streak-14", "Fortnight Fighter", "Complete tasks for 14 consecutive days", _STREAKS, "🔥🔥🔥🔥", const.ACHIEVEMENT_METRIC_STREAK, 14),
    # Variety
    _achievement("variety-3", "Diverse Doer", "Complete tasks from 3 different categories", _VARIETY, "🌈", const.ACHIEVEMENT_METRIC_VARIETY, 3),
    _achievement("variety-5", "Versatile Victor", "Complete tasks from 5 different categories", _VARIETY, "🎭", const.ACHIEVEMENT_METRIC_VARIETY, 5),
    _achievement("variety-7", "Category Collector", "Complete tasks from 7 different categories", _VARIETY, "🎪", const.ACHIEVEMENT_METRIC_VARIETY, 7),
    _achievement("variety-10", "Master of All", "Complete tasks from 10 different categories", _VARIETY, "👑", const.ACHIEVEMENT_METRIC_VARIETY, 10),
    # Clicks
    _achievement("clicks-10", "Cat Lover", "Click the cat 10 times", _CLICKS, "🐱", const.ACHIEVEMENT_METRIC_CLICKS, 10),
    _achievement("clicks-50", "Cat Enthusiast", "Click the cat 50 times", _CLICKS, "🐱❤️", const.ACHIEVEMENT_METRIC_CLICKS, 50),
    _achievement("clicks-100", "Cat Whisperer", "Click the cat 100 times", _CLICKS, "🐱✨", const.ACHIEVEMENT_METRIC_CLICKS, 100),
    _achievement("clicks-500", "Cat Master", "Click the cat 500 times", _CLICKS, "🐱👑", const.ACHIEVEMENT_METRIC_CLICKS, 500),
    _achievement("clicks-1000", "Cat Legend", "Click the cat 1000 times", _CLICKS, "🐱💎", const.ACHIEVEMENT_METRIC_CLICKS, 1000),
    # Procrastinator (clicks inside the trailing one-minute window)
    _achievement("procrastinator-10", "Mild Procrastinator", "Click the cat 10 times in under a minute", _PROCRASTINATOR, "😅", const.ACHIEVEMENT_METRIC_RECENT_CLICKS, 10),
    _achievement("procrastinator-20", "Moderate Procrastinator", "Click the cat 20 times in under a minute", _PROCRASTINATOR, "😰", const.ACHIEVEMENT_METRIC_RECENT_CLICKS, 20),
    _achievement("procrastinator-30", "Serious Procrastinator", "Click the cat 30 times in under a minute", _PROCRASTINATOR, "😱", const.ACHIEVEMENT_METRIC_RECENT_CLICKS, 30),
    _achievement("procrastinator-50", "Master Procrastinator", "Click the cat 50 times in under a minute", _PROCRASTINATOR, "🤯", const.ACHIEVEMENT_METRIC_RECENT_CLICKS, 50),
    _achievement("procrastinator-100", "Legendary Procrastinator", "Click the cat 100 times in under a minute", _PROCRASTINATOR, "💀", const.ACHIEVEMENT_METRIC_RECENT_CLICKS, 100),
)  # fmt: skip

_CATALOG_BY_ID: dict[str, AchievementDefinition] = {
    definition["id"]: definition for definition in ACHIEVEMENT_CATALOG
}


# =============================================================================
# Lookups
# =============================================================================


def get_achievements_by_category(category: str) -> list[AchievementDefinition]:
    """Return catalog definitions in a category, in catalog order."""
    return [
        definition
        for definition in ACHIEVEMENT_CATALOG
        if definition["category"] == category
    ]


def get_achievement_by_id(achievement_id: str) -> AchievementDefinition | None:
    """Return the catalog definition for an id, or None if unknown."""
    return _CATALOG_BY_ID.get(achievement_id)


def get_unlocked_achievements(
    achievements: Iterable[AchievementData],
) -> list[AchievementData]:
    """Return achievements with a non-null unlocked_at."""
    return [a for a in achievements if a.get("unlocked_at") is not None]


def get_locked_achievements(
    achievements: Iterable[AchievementData],
) -> list[AchievementData]:
    """Return achievements that are still locked."""
    return [a for a in achievements if a.get("unlocked_at") is None]


def partition_achievements(
    achievements: Iterable[AchievementData],
) -> tuple[list[AchievementData], list[AchievementData]]:
    """Split achievements into (unlocked, locked), preserving order."""
    unlocked: list[AchievementData] = []
    locked: list[AchievementData] = []
    for achievement in achievements:
        if achievement.get("unlocked_at") is not None:
            unlocked.append(achievement)
        else:
            locked.append(achievement)
    return unlocked, locked


# =============================================================================
# Runtime State Builders
# =============================================================================


def build_default_achievements() -> list[AchievementData]:
    """Return the full catalog with every achievement locked."""
    return [{**definition, "unlocked_at": None} for definition in ACHIEVEMENT_CATALOG]


def reconcile_achievements(stored: Any) -> list[AchievementData]:
    """Merge stored unlock timestamps against the catalog.

    Rules:
    - Output holds exactly one entry per catalog id, in catalog order.
    - Metadata (title, icon, metric, threshold, ...) always comes from the catalog.
    - unlocked_at is taken from the stored entry only when it is a non-empty string.
    - Stored ids the catalog does not know are dropped.
    - Anything that is not a list of dicts is treated as "nothing stored".
    """
    unlocked_by_id: dict[str, str] = {}
    if isinstance(stored, list):
        for entry in stored:
            if not isinstance(entry, dict):
                continue
            achievement_id = entry.get(const.DATA_ACHIEVEMENT_ID)
            unlocked_at = entry.get(const.DATA_ACHIEVEMENT_UNLOCKED_AT)
            if isinstance(achievement_id, str) and isinstance(unlocked_at, str) and unlocked_at:
                unlocked_by_id[achievement_id] = unlocked_at

    dropped = set(unlocked_by_id) - set(_CATALOG_BY_ID)
    if dropped:
        const.LOGGER.debug(
            "DEBUG: Dropping unknown achievement ids from save document: %s",
            sorted(dropped),
        )

    return [
        {**definition, "unlocked_at": unlocked_by_id.get(definition["id"])}
        for definition in ACHIEVEMENT_CATALOG
    ]
