"""Tests for Corn Cat sensor states and attributes."""

from __future__ import annotations

from homeassistant.core import HomeAssistant
from homeassistant.helpers import entity_registry as er
import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.corn_cat import const
from custom_components.corn_cat.catalog import ACHIEVEMENT_CATALOG
from custom_components.corn_cat.coordinator import CornCatDataCoordinator
from tests.helpers import make_save_file, make_task

pytestmark = pytest.mark.usefixtures("init_integration")


def get_state(hass: HomeAssistant, entry: MockConfigEntry, suffix: str):
    """Return the state object of a sensor by unique_id suffix."""
    entity_id = er.async_get(hass).async_get_entity_id(
        "sensor", const.DOMAIN, f"{entry.entry_id}{suffix}"
    )
    assert entity_id is not None
    return hass.states.get(entity_id)


async def test_fresh_sensor_states(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> None:
    """A fresh creature starts at zero and clicks freely."""
    tasks_completed = get_state(
        hass, mock_config_entry, const.SENSOR_UID_SUFFIX_TASKS_COMPLETED
    )
    assert tasks_completed.state == "0"
    assert tasks_completed.attributes[const.ATTR_STAGE] == 1
    assert tasks_completed.attributes[const.ATTR_CREATURE_NAME] == "Mittens"

    click_status = get_state(
        hass, mock_config_entry, const.SENSOR_UID_SUFFIX_CLICK_STATUS
    )
    assert click_status.state == const.CLICK_STATE_NORMAL
    assert click_status.attributes[const.ATTR_CLICK_ALLOWANCE] == 30

    achievements = get_state(
        hass, mock_config_entry, const.SENSOR_UID_SUFFIX_ACHIEVEMENTS
    )
    assert achievements.state == "0"
    assert achievements.attributes[const.ATTR_TOTAL] == len(ACHIEVEMENT_CATALOG)


@pytest.mark.parametrize(
    "mock_storage_data",
    [
        make_save_file(
            [
                make_task(
                    "a",
                    title="Run",
                    task_type=const.TASK_TYPE_HEALTH,
                    completed_at="2025-01-10T10:00:00+00:00",
                ),
                make_task(
                    "b",
                    title="Pay rent",
                    task_type=const.TASK_TYPE_FINANCE,
                    completed_at="2025-01-10T11:00:00+00:00",
                ),
                make_task("c", title="Read"),
            ],
            click_count=7,
            unlocked={"tasks-completed-1": "2025-01-10T10:00:00+00:00"},
        )
    ],
)
async def test_loaded_document_states(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> None:
    """Sensors reflect a stored document."""
    tasks_completed = get_state(
        hass, mock_config_entry, const.SENSOR_UID_SUFFIX_TASKS_COMPLETED
    )
    assert tasks_completed.state == "2"
    assert tasks_completed.attributes[const.ATTR_TOTAL_TASKS] == 3
    assert tasks_completed.attributes[const.ATTR_OPEN_TASKS] == [
        {"id": "c", "title": "Read", "task_type": const.TASK_TYPE_OTHER}
    ]

    assert get_state(hass, mock_config_entry, const.SENSOR_UID_SUFFIX_CLICK_COUNT).state == "7"
    assert get_state(hass, mock_config_entry, const.SENSOR_UID_SUFFIX_VARIETY).state == "2"

    achievements = get_state(
        hass, mock_config_entry, const.SENSOR_UID_SUFFIX_ACHIEVEMENTS
    )
    assert achievements.state == "1"
    assert achievements.attributes[const.ATTR_UNLOCKED] == ["tasks-completed-1"]


async def test_click_status_follows_punishment(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,
    coordinator: CornCatDataCoordinator,
) -> None:
    """The click status sensor flips to punished and back."""
    task = await coordinator.async_add_task("Escape")
    for _ in range(30):
        await coordinator.async_click_creature()
    await hass.async_block_till_done()

    click_status = get_state(
        hass, mock_config_entry, const.SENSOR_UID_SUFFIX_CLICK_STATUS
    )
    assert click_status.state == const.CLICK_STATE_PUNISHED
    assert click_status.attributes[const.ATTR_CLICKS_USED] == 30
    assert click_status.attributes[const.ATTR_PUNISHMENT_SECONDS_LEFT] > 0

    await coordinator.async_complete_task(task["id"])
    await hass.async_block_till_done()

    click_status = get_state(
        hass, mock_config_entry, const.SENSOR_UID_SUFFIX_CLICK_STATUS
    )
    assert click_status.state == const.CLICK_STATE_NORMAL
    assert click_status.attributes[const.ATTR_CLICK_ALLOWANCE] == 40
