# File: config_flow.py
"""Config flow for the Corn Cat integration.

A single step asks for the creature's name. Only one instance is allowed,
since all instances would share the same save document.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.helpers import config_validation as cv

from . import const


class CornCatConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for Corn Cat."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> config_entries.ConfigFlowResult:
        """Ask for the creature name and create the entry."""
        if self._async_current_entries():
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        errors: dict[str, str] = {}
        if user_input is not None:
            creature_name = user_input[const.CONF_CREATURE_NAME].strip()
            if creature_name:
                const.LOGGER.debug(
                    "DEBUG: Creating Corn Cat entry for creature '%s'", creature_name
                )
                return self.async_create_entry(
                    title=creature_name,
                    data={const.CONF_CREATURE_NAME: creature_name},
                )
            errors[const.CONF_CREATURE_NAME] = const.TRANS_KEY_ERROR_INVALID_NAME

        schema = vol.Schema(
            {
                vol.Required(
                    const.CONF_CREATURE_NAME, default=const.DEFAULT_CREATURE_NAME
                ): cv.string,
            }
        )
        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER, data_schema=schema, errors=errors
        )
