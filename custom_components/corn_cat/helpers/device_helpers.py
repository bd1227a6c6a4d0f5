# File: helpers/device_helpers.py
"""Device registry helper functions for Corn Cat."""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo

from .. import const

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry


def create_creature_device_info(config_entry: ConfigEntry) -> DeviceInfo:
    """Create device info grouping every sensor of one creature.

    Args:
        config_entry: Config entry for this integration instance

    Returns:
        DeviceInfo dict for the creature device
    """
    return DeviceInfo(
        identifiers={(const.DOMAIN, config_entry.entry_id)},
        name=config_entry.title,
        manufacturer=const.CORN_CAT_TITLE,
        model="Creature",
        entry_type=DeviceEntryType.SERVICE,
    )
