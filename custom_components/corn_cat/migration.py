# File: migration.py
"""Legacy save document migration for Corn Cat.

Older save documents differ from the current schema in a few ways:
- The creature was stored under the "cat" key.
- Keys were camelCase (completedAt, taskType, clickCount, ...).
- Tasks predating categories have no task_type; early tasks used "text"
  instead of "title".
- created_at was a millisecond epoch number instead of an ISO string.

Every function here is pure and idempotent: running a migrated document
through again returns an equal document. Validation and defaulting of the
result is CornCatStore.reconcile's job, not this module's.
"""

from __future__ import annotations

from typing import Any

from . import const
from .utils.dt_utils import dt_from_epoch_ms


def categorize_task(text: str) -> str:
    """Guess a task type from its title.

    Case-insensitive substring match against const.TASK_TYPE_KEYWORDS; the
    first category (in declaration order) with a matching keyword wins.
    Falls back to the default type.
    """
    lowered = (text or "").lower()
    for task_type, keywords in const.TASK_TYPE_KEYWORDS.items():
        if any(keyword in lowered for keyword in keywords):
            return task_type
    return const.DEFAULT_TASK_TYPE


def _rename_legacy_keys(record: dict[str, Any]) -> dict[str, Any]:
    """Return a copy with camelCase keys renamed; snake_case keys win."""
    renamed = dict(record)
    for legacy_key, current_key in const.LEGACY_KEY_RENAMES.items():
        if legacy_key not in renamed:
            continue
        value = renamed.pop(legacy_key)
        renamed.setdefault(current_key, value)
    return renamed


def _migrate_timestamp(value: Any) -> Any:
    """Convert a millisecond epoch number to an ISO string.

    Strings and None pass through. Anything unconvertible is returned as-is
    and left to reconciliation.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    try:
        return dt_from_epoch_ms(value).isoformat()
    except (OverflowError, OSError, ValueError) as err:
        const.LOGGER.warning(
            "WARNING: Migrate Timestamp - Error converting epoch '%s': %s",
            value,
            err,
        )
        return value


def migrate_task(task: dict[str, Any]) -> dict[str, Any]:
    """Bring one stored task up to the current schema."""
    migrated = _rename_legacy_keys(task)

    legacy_text = migrated.pop(const.LEGACY_DATA_TASK_TEXT, None)
    if not migrated.get(const.DATA_TASK_TITLE) and isinstance(legacy_text, str):
        migrated[const.DATA_TASK_TITLE] = legacy_text

    if migrated.get(const.DATA_TASK_TYPE) not in const.TASK_TYPE_OPTIONS:
        title = migrated.get(const.DATA_TASK_TITLE)
        migrated[const.DATA_TASK_TYPE] = categorize_task(
            title if isinstance(title, str) else ""
        )

    for key in (const.DATA_TASK_CREATED_AT, const.DATA_TASK_COMPLETED_AT):
        if key in migrated:
            migrated[key] = _migrate_timestamp(migrated[key])

    return migrated


def migrate_tasks(tasks: Any) -> list[Any]:
    """Migrate every task dict in a stored task list.

    Non-dict entries are passed through for reconciliation to discard.
    """
    if not isinstance(tasks, list):
        return []
    return [migrate_task(task) if isinstance(task, dict) else task for task in tasks]


def migrate_legacy_document(raw: dict[str, Any]) -> dict[str, Any]:
    """Migrate a whole stored document to current key names.

    Returns a new dict; the input is not modified.
    """
    document = dict(raw)

    if const.LEGACY_DATA_CAT in document:
        legacy_creature = document.pop(const.LEGACY_DATA_CAT)
        if not isinstance(document.get(const.DATA_CREATURE), dict):
            const.LOGGER.info("INFO: Migrating legacy 'cat' record to 'creature'")
            document[const.DATA_CREATURE] = legacy_creature

    if const.DATA_TASKS in document:
        document[const.DATA_TASKS] = migrate_tasks(document[const.DATA_TASKS])

    creature = document.get(const.DATA_CREATURE)
    if isinstance(creature, dict):
        document[const.DATA_CREATURE] = _rename_legacy_keys(creature)

    achievements = document.get(const.DATA_ACHIEVEMENTS)
    if isinstance(achievements, list):
        document[const.DATA_ACHIEVEMENTS] = [
            _rename_legacy_keys(entry) if isinstance(entry, dict) else entry
            for entry in achievements
        ]

    settings = document.get(const.DATA_SETTINGS)
    if isinstance(settings, dict):
        document[const.DATA_SETTINGS] = _rename_legacy_keys(settings)

    return document
