# File: services.py
"""Defines custom services for the Corn Cat integration.

These services are the user actions of the app: managing tasks, clicking the
creature, changing settings and moving the save document in or out.
"""

from __future__ import annotations

import voluptuous as vol
from homeassistant.core import (
    HomeAssistant,
    ServiceCall,
    ServiceResponse,
    SupportsResponse,
)
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from . import const
from .coordinator import CornCatDataCoordinator
from .helpers.backup_helpers import EXPORT_FILE_NAME

# --- Service Schemas ---
ADD_TASK_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TITLE): cv.string,
        vol.Optional(const.FIELD_TASK_TYPE, default=const.DEFAULT_TASK_TYPE): vol.In(
            const.TASK_TYPE_OPTIONS
        ),
    }
)

TASK_ID_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_TASK_ID): cv.string,
    }
)

CLICK_CREATURE_SCHEMA = vol.Schema({})

UPDATE_SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional(const.FIELD_REDUCE_MOTION): cv.boolean,
        vol.Optional(const.FIELD_THEME): vol.In(const.THEME_OPTIONS),
    }
)

EXPORT_DATA_SCHEMA = vol.Schema({})

IMPORT_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_JSON): cv.string,
    }
)

CLEAR_DATA_SCHEMA = vol.Schema({})


def _get_coordinator(hass: HomeAssistant) -> CornCatDataCoordinator:
    """Return the coordinator of the (single) loaded entry.

    Raises:
        HomeAssistantError: No Corn Cat entry is loaded.
    """
    entries = hass.data.get(const.DOMAIN)
    if not entries:
        const.LOGGER.warning("WARNING: %s", const.MSG_NO_ENTRY_FOUND)
        raise HomeAssistantError(const.MSG_NO_ENTRY_FOUND)
    entry_data = next(iter(entries.values()))
    return entry_data[const.COORDINATOR]


def async_setup_services(hass: HomeAssistant) -> None:
    """Register Corn Cat services."""

    async def handle_add_task(call: ServiceCall) -> None:
        """Handle adding a task."""
        coordinator = _get_coordinator(hass)
        try:
            await coordinator.async_add_task(
                call.data[const.FIELD_TITLE], call.data[const.FIELD_TASK_TYPE]
            )
        except ValueError as err:
            const.LOGGER.warning("WARNING: Add Task: %s", err)
            raise HomeAssistantError(str(err)) from err

    async def handle_complete_task(call: ServiceCall) -> None:
        """Handle toggling a task's completion."""
        coordinator = _get_coordinator(hass)
        task_id = call.data[const.FIELD_TASK_ID]
        if await coordinator.async_complete_task(task_id):
            const.LOGGER.info("INFO: Task '%s' completion toggled", task_id)

    async def handle_delete_task(call: ServiceCall) -> None:
        """Handle deleting a task."""
        coordinator = _get_coordinator(hass)
        task_id = call.data[const.FIELD_TASK_ID]
        if await coordinator.async_delete_task(task_id):
            const.LOGGER.info("INFO: Task '%s' deleted", task_id)

    async def handle_click_creature(call: ServiceCall) -> None:
        """Handle a click on the creature."""
        coordinator = _get_coordinator(hass)
        await coordinator.async_click_creature()

    async def handle_update_settings(call: ServiceCall) -> None:
        """Handle a settings change."""
        coordinator = _get_coordinator(hass)
        await coordinator.async_update_settings(
            reduce_motion=call.data.get(const.FIELD_REDUCE_MOTION),
            theme=call.data.get(const.FIELD_THEME),
        )

    async def handle_export_data(call: ServiceCall) -> ServiceResponse:
        """Return the save document, both structured and as JSON text."""
        coordinator = _get_coordinator(hass)
        const.LOGGER.info("INFO: Exporting save document as %s", EXPORT_FILE_NAME)
        return {
            const.RESPONSE_SAVE_FILE: dict(coordinator.save_data),
            const.RESPONSE_JSON: coordinator.export_data(),
        }

    async def handle_import_data(call: ServiceCall) -> None:
        """Replace all state with an imported save document."""
        coordinator = _get_coordinator(hass)
        await coordinator.async_import_data(call.data[const.FIELD_JSON])

    async def handle_clear_data(call: ServiceCall) -> None:
        """Delete all data and start over."""
        coordinator = _get_coordinator(hass)
        await coordinator.async_clear_data()

    # --- Register Services ---
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_ADD_TASK,
        handle_add_task,
        schema=ADD_TASK_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_COMPLETE_TASK,
        handle_complete_task,
        schema=TASK_ID_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_DELETE_TASK,
        handle_delete_task,
        schema=TASK_ID_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_CLICK_CREATURE,
        handle_click_creature,
        schema=CLICK_CREATURE_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_UPDATE_SETTINGS,
        handle_update_settings,
        schema=UPDATE_SETTINGS_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_EXPORT_DATA,
        handle_export_data,
        schema=EXPORT_DATA_SCHEMA,
        supports_response=SupportsResponse.ONLY,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_IMPORT_DATA,
        handle_import_data,
        schema=IMPORT_DATA_SCHEMA,
    )
    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_CLEAR_DATA,
        handle_clear_data,
        schema=CLEAR_DATA_SCHEMA,
    )

    const.LOGGER.info("INFO: Corn Cat services have been registered successfully")


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unregister Corn Cat services when unloading the integration."""
    services = [
        const.SERVICE_ADD_TASK,
        const.SERVICE_COMPLETE_TASK,
        const.SERVICE_DELETE_TASK,
        const.SERVICE_CLICK_CREATURE,
        const.SERVICE_UPDATE_SETTINGS,
        const.SERVICE_EXPORT_DATA,
        const.SERVICE_IMPORT_DATA,
        const.SERVICE_CLEAR_DATA,
    ]

    for service in services:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: Corn Cat services have been unregistered")
