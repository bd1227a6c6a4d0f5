"""Base entity classes for the Corn Cat integration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .coordinator import CornCatDataCoordinator
from .helpers.device_helpers import create_creature_device_info

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry


class CornCatCoordinatorEntity(CoordinatorEntity[CornCatDataCoordinator]):
    """Base entity class for Corn Cat sensors.

    Every entity of an entry hangs off the same creature device and builds its
    unique_id from the entry id plus a per-sensor suffix.
    """

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: CornCatDataCoordinator,
        entry: ConfigEntry,
        unique_id_suffix: str,
    ) -> None:
        """Initialize the entity.

        Args:
            coordinator: CornCatDataCoordinator instance for data access.
            entry: ConfigEntry for this integration instance.
            unique_id_suffix: const.SENSOR_UID_SUFFIX_* value for this entity.
        """
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}{unique_id_suffix}"
        self._attr_device_info = create_creature_device_info(entry)
