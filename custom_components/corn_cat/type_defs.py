"""Type definitions for Corn Cat data structures.

The save document has fixed keys known at design time, so every structure
here is a TypedDict. TypedDict is STATIC ANALYSIS ONLY: runtime fallbacks
(.get() defaults, isinstance checks) stay in store.py and migration.py.

IMPORTANT: This file must NOT import from coordinator.py or any module that
imports the coordinator, to avoid circular dependencies.
"""

from typing import TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

TaskId = str  # uuid4 hex string
AchievementId = str  # e.g. "tasks-completed-5"
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"


# =============================================================================
# Save Document
# =============================================================================


class TaskData(TypedDict):
    """A single task. completed_at is None while the task is open."""

    id: TaskId
    title: str
    task_type: str
    created_at: ISODatetime
    completed_at: ISODatetime | None


class CreatureData(TypedDict):
    """The creature fed by completed tasks.

    task_count is always recomputed from the task list, never incremented.
    """

    id: str
    name: str
    task_count: int
    click_count: int


class AchievementDefinition(TypedDict):
    """Static catalog entry. metric/threshold drive unlock evaluation."""

    id: AchievementId
    title: str
    description: str
    category: str
    icon: str
    metric: str
    threshold: int


class AchievementData(AchievementDefinition):
    """Catalog entry merged with its runtime unlock timestamp."""

    unlocked_at: ISODatetime | None


class SettingsData(TypedDict):
    """UI preferences carried in the save document."""

    reduce_motion: bool
    theme: str


class SaveFileData(TypedDict):
    """The unit of persistence."""

    version: int
    tasks: list[TaskData]
    creature: CreatureData
    achievements: list[AchievementData]
    settings: SettingsData
