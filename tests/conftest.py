"""Shared fixtures for Corn Cat tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import patch

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.corn_cat import const
from custom_components.corn_cat.coordinator import CornCatDataCoordinator

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return a mock config entry."""
    return MockConfigEntry(
        domain=const.DOMAIN,
        title="Mittens",
        data={const.CONF_CREATURE_NAME: "Mittens"},
        entry_id="test_entry_id",
    )


@pytest.fixture
def mock_storage_data() -> dict[str, Any] | None:
    """Return the document Store.async_load yields (None = nothing stored)."""
    return None


@pytest.fixture
async def init_integration(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,  # pylint: disable=redefined-outer-name
    mock_storage_data: dict[str, Any] | None,  # pylint: disable=redefined-outer-name
) -> MockConfigEntry:
    """Set up the Corn Cat integration for testing with mocked storage."""
    mock_config_entry.add_to_hass(hass)

    with patch(
        "homeassistant.helpers.storage.Store.async_load",
        return_value=mock_storage_data,
    ):
        assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
        await hass.async_block_till_done()

    return mock_config_entry


@pytest.fixture
def coordinator(
    hass: HomeAssistant,
    init_integration: MockConfigEntry,  # pylint: disable=redefined-outer-name
) -> CornCatDataCoordinator:
    """Return the coordinator of the set-up entry."""
    return hass.data[const.DOMAIN][init_integration.entry_id][const.COORDINATOR]
