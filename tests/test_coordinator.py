"""Tests for CornCatDataCoordinator - commits, announcements and the click gate."""

from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import patch

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.dispatcher import async_dispatcher_connect
import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.corn_cat import const
from custom_components.corn_cat.coordinator import CornCatDataCoordinator
from custom_components.corn_cat.helpers.backup_helpers import (
    InvalidImportError,
    export_save_file,
)
from custom_components.corn_cat.helpers.entity_helpers import get_event_signal
from custom_components.corn_cat.store import StorageError
from tests.helpers import make_save_file, make_task


def unlocked_ids(coordinator: CornCatDataCoordinator) -> set[str]:
    """Return unlocked achievement ids."""
    return {a["id"] for a in coordinator.achievements if a["unlocked_at"] is not None}


# ================================================================================
# Tasks
# ================================================================================


async def test_first_task_completion(coordinator: CornCatDataCoordinator) -> None:
    """Adding and completing one task feeds the creature and unlocks First Task."""
    task = await coordinator.async_add_task("Water plants", const.TASK_TYPE_CHORE)
    assert coordinator.tasks[0]["id"] == task["id"]
    assert unlocked_ids(coordinator) == {"tasks-created-1"}

    assert await coordinator.async_complete_task(task["id"]) is True

    assert coordinator.creature["task_count"] == 1
    assert coordinator.tasks[0]["completed_at"] is not None
    assert "tasks-completed-1" in unlocked_ids(coordinator)


async def test_add_task_empty_title(coordinator: CornCatDataCoordinator) -> None:
    """Blank titles are rejected before anything is stored."""
    with pytest.raises(ValueError):
        await coordinator.async_add_task("   ")
    assert coordinator.tasks == []


async def test_delete_completed_and_unknown(coordinator: CornCatDataCoordinator) -> None:
    """Deleting a completed task recounts; unknown ids are no-ops."""
    task = await coordinator.async_add_task("Pay bill", const.TASK_TYPE_FINANCE)
    await coordinator.async_complete_task(task["id"])

    with patch.object(coordinator.store, "async_save") as mock_save:
        assert await coordinator.async_delete_task("does-not-exist") is False
        assert await coordinator.async_complete_task("does-not-exist") is False
    mock_save.assert_not_called()

    assert await coordinator.async_delete_task(task["id"]) is True
    assert coordinator.tasks == []
    assert coordinator.creature["task_count"] == 0
    assert "tasks-completed-1" in unlocked_ids(coordinator)


async def test_commits_are_persisted(
    hass: HomeAssistant,
    coordinator: CornCatDataCoordinator,
    hass_storage: dict[str, Any],
) -> None:
    """Every change lands in storage."""
    await coordinator.async_add_task("Read", const.TASK_TYPE_LEARNING)
    stored = hass_storage[const.STORAGE_KEY]["data"]
    assert stored["tasks"][0]["title"] == "Read"
    assert stored["version"] == const.SAVE_FILE_VERSION


async def test_storage_failure_keeps_state(coordinator: CornCatDataCoordinator) -> None:
    """A failed save raises StorageError and leaves state as it was."""
    with (
        patch.object(
            coordinator.store._store, "async_save", side_effect=OSError("disk full")
        ),
        pytest.raises(StorageError),
    ):
        await coordinator.async_add_task("Lost task")
    assert coordinator.tasks == []
    assert unlocked_ids(coordinator) == set()


# ================================================================================
# Achievements
# ================================================================================


async def test_unlock_is_announced(
    hass: HomeAssistant,
    coordinator: CornCatDataCoordinator,
    init_integration: MockConfigEntry,
) -> None:
    """Each newly unlocked achievement is dispatched once."""
    received: list[dict[str, Any]] = []

    @callback
    def _capture(payload: dict[str, Any]) -> None:
        received.append(payload)

    unsub = async_dispatcher_connect(
        hass,
        get_event_signal(
            init_integration.entry_id, const.SIGNAL_SUFFIX_ACHIEVEMENT_UNLOCKED
        ),
        _capture,
    )

    task = await coordinator.async_add_task("Gym session", const.TASK_TYPE_HEALTH)
    await coordinator.async_complete_task(task["id"])
    await coordinator.async_complete_task(task["id"])
    await coordinator.async_complete_task(task["id"])
    await hass.async_block_till_done()
    unsub()

    assert [payload["id"] for payload in received] == [
        "tasks-created-1",
        "tasks-completed-1",
    ]
    assert received[1]["title"] == "First Task"


# ================================================================================
# Clicks
# ================================================================================


async def test_ten_clicks_unlock_cat_lover(coordinator: CornCatDataCoordinator) -> None:
    """clicks-10 unlocks on the tenth accepted click."""
    for _ in range(9):
        await coordinator.async_click_creature()
    assert "clicks-10" not in unlocked_ids(coordinator)

    decision = await coordinator.async_click_creature()

    assert decision.accepted is True
    assert coordinator.creature["click_count"] == 10
    assert "clicks-10" in unlocked_ids(coordinator)
    assert "procrastinator-10" in unlocked_ids(coordinator)


async def test_punishment_and_release_by_completion(
    coordinator: CornCatDataCoordinator,
) -> None:
    """30 quick clicks lock clicking; completing a task unlocks it."""
    task = await coordinator.async_add_task("Escape hatch")

    decisions = [await coordinator.async_click_creature() for _ in range(30)]
    assert decisions[-1].accepted is True
    assert decisions[-1].punishment_started is True
    assert coordinator.get_click_status().state == const.CLICK_STATE_PUNISHED
    assert coordinator.creature["click_count"] == 30

    rejected = await coordinator.async_click_creature()
    assert rejected.accepted is False
    assert coordinator.creature["click_count"] == 30

    await coordinator.async_complete_task(task["id"])

    status = coordinator.get_click_status()
    assert status.state == const.CLICK_STATE_NORMAL
    assert status.clicks_used == 0
    assert status.allowance == 40
    assert (await coordinator.async_click_creature()).accepted is True
    assert coordinator.creature["click_count"] == 31


async def test_uncompleting_does_not_release(coordinator: CornCatDataCoordinator) -> None:
    """Only a toggle into completed resets the limiter."""
    task = await coordinator.async_add_task("Toggle me")
    await coordinator.async_complete_task(task["id"])

    for _ in range(40):
        await coordinator.async_click_creature()
    assert coordinator.get_click_status().state == const.CLICK_STATE_PUNISHED

    await coordinator.async_complete_task(task["id"])

    assert coordinator.get_click_status().state == const.CLICK_STATE_PUNISHED


# ================================================================================
# Settings / Import / Export / Clear
# ================================================================================


async def test_update_settings(coordinator: CornCatDataCoordinator) -> None:
    """Only provided settings change."""
    await coordinator.async_update_settings(theme=const.THEME_LIGHT)
    assert coordinator.settings == {"reduce_motion": False, "theme": "light"}
    await coordinator.async_update_settings(reduce_motion=True)
    assert coordinator.settings == {"reduce_motion": True, "theme": "light"}


async def test_import_replaces_state(coordinator: CornCatDataCoordinator) -> None:
    """A valid import replaces everything."""
    await coordinator.async_add_task("Before import")
    document = make_save_file(
        [make_task("imported", completed_at="2025-01-10T10:00:00+00:00")],
        click_count=5,
    )
    exported_elsewhere = coordinator.export_data()

    await coordinator.async_import_data(
        exported_elsewhere.replace("Before import", "Renamed")
    )
    assert coordinator.tasks[0]["title"] == "Renamed"

    await coordinator.async_import_data(export_save_file(document))
    assert [t["id"] for t in coordinator.tasks] == ["imported"]
    assert coordinator.creature["task_count"] == 1
    assert coordinator.creature["click_count"] == 5


async def test_invalid_import_keeps_state(coordinator: CornCatDataCoordinator) -> None:
    """A malformed import raises and changes nothing."""
    await coordinator.async_add_task("Keep me")
    with pytest.raises(InvalidImportError):
        await coordinator.async_import_data("{oops")
    assert coordinator.tasks[0]["title"] == "Keep me"


async def test_clear_data(coordinator: CornCatDataCoordinator) -> None:
    """Clearing returns to a fresh document with the configured name."""
    await coordinator.async_add_task("Soon gone")
    await coordinator.async_clear_data()
    assert coordinator.tasks == []
    assert coordinator.creature["name"] == "Mittens"
    assert coordinator.creature["click_count"] == 0


@pytest.mark.parametrize(
    "mock_storage_data",
    [make_save_file([make_task("a", completed_at="2025-01-10T10:00:00+00:00")], click_count=3)],
)
async def test_loads_existing_document(coordinator: CornCatDataCoordinator) -> None:
    """Setup picks up the stored document."""
    assert coordinator.tasks[0]["id"] == "a"
    assert coordinator.creature["task_count"] == 1
    assert coordinator.creature["click_count"] == 3


# ================================================================================
# Concurrent actions
# ================================================================================


async def _slow_save(*args: Any, **kwargs: Any) -> None:
    """Stand-in for Store.async_save that yields to the event loop."""
    await asyncio.sleep(0.01)


async def test_concurrent_adds_keep_both(coordinator: CornCatDataCoordinator) -> None:
    """Two adds racing across a slow save both land."""
    with patch.object(coordinator.store._store, "async_save", side_effect=_slow_save):
        await asyncio.gather(
            coordinator.async_add_task("First"),
            coordinator.async_add_task("Second"),
        )

    assert sorted(task["title"] for task in coordinator.tasks) == ["First", "Second"]
    assert "tasks-created-1" in unlocked_ids(coordinator)


async def test_concurrent_clicks_all_count(coordinator: CornCatDataCoordinator) -> None:
    """Every click of a burst is counted in the document and the window alike."""
    with patch.object(coordinator.store._store, "async_save", side_effect=_slow_save):
        decisions = await asyncio.gather(
            *(coordinator.async_click_creature() for _ in range(5))
        )

    assert all(decision.accepted for decision in decisions)
    assert sorted(decision.recent_clicks for decision in decisions) == [1, 2, 3, 4, 5]
    assert coordinator.creature["click_count"] == 5
    assert coordinator.get_click_status().clicks_used == 5


async def test_concurrent_complete_and_settings(
    coordinator: CornCatDataCoordinator,
) -> None:
    """A settings change racing a completion keeps both."""
    task = await coordinator.async_add_task("Race")
    with patch.object(coordinator.store._store, "async_save", side_effect=_slow_save):
        await asyncio.gather(
            coordinator.async_complete_task(task["id"]),
            coordinator.async_update_settings(theme="light"),
        )

    assert coordinator.creature["task_count"] == 1
    assert coordinator.settings["theme"] == "light"


async def test_failed_click_saves_are_not_counted(
    coordinator: CornCatDataCoordinator,
) -> None:
    """Clicks whose save fails never reach the limiter window."""
    with patch.object(
        coordinator.store._store, "async_save", side_effect=OSError("disk full")
    ):
        for _ in range(30):
            with pytest.raises(StorageError):
                await coordinator.async_click_creature()

    status = coordinator.get_click_status()
    assert coordinator.creature["click_count"] == 0
    assert status.state == const.CLICK_STATE_NORMAL
    assert status.clicks_used == 0
    assert (await coordinator.async_click_creature()).accepted is True
    assert coordinator.creature["click_count"] == 1
