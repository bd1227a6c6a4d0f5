# File: __init__.py
"""Initialization file for the Corn Cat integration.

Handles setting up the integration, including loading the save document,
creating the coordinator, registering services and forwarding to platforms.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.exceptions import ConfigEntryNotReady

from . import const
from .coordinator import CornCatDataCoordinator
from .services import async_setup_services, async_unload_services
from .store import CornCatStore, StorageError

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for Corn Cat entry: %s", entry.entry_id)

    store = CornCatStore(
        hass,
        const.STORAGE_KEY,
        creature_name=entry.data.get(
            const.CONF_CREATURE_NAME, const.DEFAULT_CREATURE_NAME
        ),
    )
    try:
        await store.async_load()
    except StorageError as err:
        const.LOGGER.error("ERROR: Failed to load Corn Cat data: %s", err)
        raise ConfigEntryNotReady(str(err)) from err

    coordinator = CornCatDataCoordinator(hass, entry, store)
    await coordinator.async_config_entry_first_refresh()

    hass.data.setdefault(const.DOMAIN, {})[entry.entry_id] = {
        const.COORDINATOR: coordinator,
        const.STORE: store,
    }

    async_setup_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    const.LOGGER.info("INFO: Corn Cat setup complete for entry: %s", entry.entry_id)
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading Corn Cat entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        hass.data[const.DOMAIN].pop(entry.entry_id)
        if not hass.data[const.DOMAIN]:
            await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Handle removal of a config entry by deleting its stored data."""
    const.LOGGER.info("INFO: Removing Corn Cat entry: %s", entry.entry_id)

    store = CornCatStore(hass, const.STORAGE_KEY)
    try:
        await store.async_clear()
    except StorageError as err:
        const.LOGGER.warning(
            "WARNING: Corn Cat data for entry %s could not be removed: %s",
            entry.entry_id,
            err,
        )
        return

    const.LOGGER.info("INFO: Corn Cat entry data cleared: %s", entry.entry_id)
