# File: sensor.py
"""Sensors for the Corn Cat integration.

Sensors Defined in This File (6):

01. CreatureTasksCompletedSensor
02. CreatureClickCountSensor
03. CreatureStreakSensor
04. CreatureVarietySensor
05. CreatureAchievementsSensor
06. CreatureClickStatusSensor
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.const import UnitOfTime

from . import const
from .catalog import partition_achievements
from .engines import StatisticsEngine
from .entity import CornCatCoordinatorEntity

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import CornCatDataCoordinator


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up sensors for the Corn Cat integration."""
    coordinator: CornCatDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    async_add_entities(
        [
            CreatureTasksCompletedSensor(coordinator, entry),
            CreatureClickCountSensor(coordinator, entry),
            CreatureStreakSensor(coordinator, entry),
            CreatureVarietySensor(coordinator, entry),
            CreatureAchievementsSensor(coordinator, entry),
            CreatureClickStatusSensor(coordinator, entry),
        ]
    )


# ------------------------------------------------------------------------------------------
class CreatureTasksCompletedSensor(CornCatCoordinatorEntity, SensorEntity):
    """Completed task count; the creature's growth stage is derived from it."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_TASKS_COMPLETED
    _attr_state_class = SensorStateClass.TOTAL
    _attr_icon = "mdi:cat"

    def __init__(self, coordinator: CornCatDataCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_TASKS_COMPLETED)

    @property
    def native_value(self) -> int:
        """Return the number of completed tasks."""
        return self.coordinator.creature[const.DATA_CREATURE_TASK_COUNT]

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose growth stage and open task titles."""
        tasks = self.coordinator.tasks
        return {
            const.ATTR_CREATURE_NAME: self.coordinator.creature[
                const.DATA_CREATURE_NAME
            ],
            const.ATTR_STAGE: StatisticsEngine.get_creature_stage(self.native_value),
            const.ATTR_TOTAL_TASKS: len(tasks),
            const.ATTR_OPEN_TASKS: [
                {
                    const.DATA_TASK_ID: task[const.DATA_TASK_ID],
                    const.DATA_TASK_TITLE: task[const.DATA_TASK_TITLE],
                    const.DATA_TASK_TYPE: task[const.DATA_TASK_TYPE],
                }
                for task in tasks
                if not StatisticsEngine.is_completed(task)
            ],
        }


# ------------------------------------------------------------------------------------------
class CreatureClickCountSensor(CornCatCoordinatorEntity, SensorEntity):
    """Lifetime accepted clicks on the creature."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_CLICK_COUNT
    _attr_state_class = SensorStateClass.TOTAL_INCREASING
    _attr_icon = "mdi:paw"

    def __init__(self, coordinator: CornCatDataCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_CLICK_COUNT)

    @property
    def native_value(self) -> int:
        """Return the click count."""
        return self.coordinator.creature[const.DATA_CREATURE_CLICK_COUNT]


# ------------------------------------------------------------------------------------------
class CreatureStreakSensor(CornCatCoordinatorEntity, SensorEntity):
    """Consecutive days with at least one completed task."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_STREAK
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = UnitOfTime.DAYS
    _attr_icon = "mdi:fire"

    def __init__(self, coordinator: CornCatDataCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_STREAK)

    @property
    def native_value(self) -> int:
        """Return the current streak in days."""
        return StatisticsEngine.get_current_streak(self.coordinator.tasks)


# ------------------------------------------------------------------------------------------
class CreatureVarietySensor(CornCatCoordinatorEntity, SensorEntity):
    """Distinct task categories among completed tasks."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_VARIETY
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:palette"

    def __init__(self, coordinator: CornCatDataCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_VARIETY)

    @property
    def native_value(self) -> int:
        """Return the number of distinct completed categories."""
        return StatisticsEngine.get_unique_task_types(self.coordinator.tasks)


# ------------------------------------------------------------------------------------------
class CreatureAchievementsSensor(CornCatCoordinatorEntity, SensorEntity):
    """Number of unlocked achievements, with unlocked/locked ids as attributes."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_ACHIEVEMENTS
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:trophy"

    def __init__(self, coordinator: CornCatDataCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_ACHIEVEMENTS)

    @property
    def native_value(self) -> int:
        """Return the unlocked achievement count."""
        unlocked, _locked = partition_achievements(self.coordinator.achievements)
        return len(unlocked)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose which achievements are unlocked and which remain."""
        unlocked, locked = partition_achievements(self.coordinator.achievements)
        return {
            const.ATTR_UNLOCKED: [a[const.DATA_ACHIEVEMENT_ID] for a in unlocked],
            const.ATTR_LOCKED: [a[const.DATA_ACHIEVEMENT_ID] for a in locked],
            const.ATTR_TOTAL: len(unlocked) + len(locked),
        }


# ------------------------------------------------------------------------------------------
class CreatureClickStatusSensor(CornCatCoordinatorEntity, SensorEntity):
    """Click limiter state: normal or punished."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_CLICK_STATUS
    _attr_device_class = SensorDeviceClass.ENUM
    _attr_options = [const.CLICK_STATE_NORMAL, const.CLICK_STATE_PUNISHED]
    _attr_icon = "mdi:timer-sand"

    def __init__(self, coordinator: CornCatDataCoordinator, entry: ConfigEntry) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator, entry, const.SENSOR_UID_SUFFIX_CLICK_STATUS)

    @property
    def native_value(self) -> str:
        """Return the limiter state."""
        return self.coordinator.get_click_status().state

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose window usage and remaining punishment."""
        status = self.coordinator.get_click_status()
        return {
            const.ATTR_CLICKS_USED: status.clicks_used,
            const.ATTR_CLICK_ALLOWANCE: status.allowance,
            const.ATTR_PUNISHMENT_SECONDS_LEFT: status.seconds_left,
        }
