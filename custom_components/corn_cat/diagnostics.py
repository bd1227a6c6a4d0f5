"""Diagnostics support for the Corn Cat integration.

The diagnostics JSON is the raw save document, identical to what export_data
returns, so it can be fed straight back through import_data. The runtime
click limiter state is added alongside it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.util import dt as dt_util

from . import const

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

    from .coordinator import CornCatDataCoordinator


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: CornCatDataCoordinator = hass.data[const.DOMAIN][entry.entry_id][
        const.COORDINATOR
    ]
    status = coordinator.get_click_status(dt_util.utcnow())
    return {
        "save_file": coordinator.save_data,
        "click_limiter": {
            "state": status.state,
            const.ATTR_CLICKS_USED: status.clicks_used,
            const.ATTR_CLICK_ALLOWANCE: status.allowance,
            const.ATTR_PUNISHMENT_SECONDS_LEFT: status.seconds_left,
        },
        "storage_path": coordinator.store.get_storage_path(),
    }
