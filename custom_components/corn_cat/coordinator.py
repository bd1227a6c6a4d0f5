# File: coordinator.py
"""Coordinator for the Corn Cat integration.

Owns the in-memory save document and the click rate limiter. Every user
action runs through one of the pure engines, and the resulting
TransitionResult is committed here: persisted through the store first, then
published to entities. A failed save leaves the in-memory state untouched.

The periodic update is the one-second tick: it prunes the click window and
expires a finished punishment so the click status sensor stays current.

Every action holds a single lock from reading the document to committing the
result, so concurrent service calls apply one after another.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from homeassistant.helpers.dispatcher import async_dispatcher_send
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator
from homeassistant.util import dt as dt_util

from . import const
from .catalog import get_achievement_by_id
from .engines import ClickDecision, ClickRateLimiter, ClickStatus, TaskEngine
from .helpers.backup_helpers import export_save_file, parse_import
from .helpers.entity_helpers import get_event_signal
from .type_defs import SaveFileData

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

    from .engines import TransitionResult
    from .store import CornCatStore
    from .type_defs import AchievementData, CreatureData, SettingsData, TaskData


class CornCatDataCoordinator(DataUpdateCoordinator[SaveFileData]):
    """Coordinator for the Corn Cat integration.

    Single owner of the save document for one config entry.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        store: CornCatStore,
    ) -> None:
        """Initialize the CornCatDataCoordinator."""
        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(seconds=const.TICK_INTERVAL_SECONDS),
        )
        self.store = store
        self._data: SaveFileData = store.data
        self._click_limiter = ClickRateLimiter()
        self._lock = asyncio.Lock()

    # -------------------------------------------------------------------------------------
    # Data Accessors
    # -------------------------------------------------------------------------------------

    @property
    def save_data(self) -> SaveFileData:
        """Return the current save document."""
        return self._data

    @property
    def tasks(self) -> list[TaskData]:
        """Return the task list, newest first."""
        return self._data["tasks"]

    @property
    def creature(self) -> CreatureData:
        """Return the creature counters."""
        return self._data["creature"]

    @property
    def achievements(self) -> list[AchievementData]:
        """Return achievement state in catalog order."""
        return self._data["achievements"]

    @property
    def settings(self) -> SettingsData:
        """Return UI settings."""
        return self._data["settings"]

    @property
    def click_limiter(self) -> ClickRateLimiter:
        """Return the runtime click rate limiter."""
        return self._click_limiter

    def get_click_status(self, now: datetime | None = None) -> ClickStatus:
        """Return the click limiter snapshot for display."""
        return self._click_limiter.status(
            now or dt_util.utcnow(),
            self.creature[const.DATA_CREATURE_TASK_COUNT],
        )

    # -------------------------------------------------------------------------------------
    # Periodic Tick
    # -------------------------------------------------------------------------------------

    async def _async_update_data(self) -> SaveFileData:
        """Prune the click window and expire a finished punishment."""
        if self._click_limiter.tick(dt_util.utcnow()):
            const.LOGGER.debug("DEBUG: Click punishment period ended")
        return self._data

    # -------------------------------------------------------------------------------------
    # Commit
    # -------------------------------------------------------------------------------------

    async def _async_commit(self, new_data: SaveFileData) -> None:
        """Persist a new save document, then publish it to entities.

        Callers hold self._lock.

        Raises:
            StorageError: Persisting failed; in-memory state is unchanged.
        """
        await self.store.async_save(new_data)
        self._data = self.store.data
        self.async_set_updated_data(self._data)

    async def _async_apply(
        self, result: TransitionResult, *, keep_tasks: bool = False
    ) -> None:
        """Commit a transition result when it changed anything."""
        if not result.changed:
            return
        new_data: SaveFileData = {
            **self._data,
            "tasks": self._data["tasks"] if keep_tasks else result.tasks,
            "creature": result.creature,
            "achievements": result.achievements,
        }
        await self._async_commit(new_data)
        self._announce_unlocks(result.newly_unlocked)

    def _announce_unlocks(self, achievement_ids: list[str]) -> None:
        """Log and dispatch each newly unlocked achievement."""
        if not achievement_ids or self.config_entry is None:
            return
        signal = get_event_signal(
            self.config_entry.entry_id, const.SIGNAL_SUFFIX_ACHIEVEMENT_UNLOCKED
        )
        for achievement_id in achievement_ids:
            definition = get_achievement_by_id(achievement_id)
            title = definition["title"] if definition else achievement_id
            const.LOGGER.info("INFO: Achievement unlocked: %s (%s)", title, achievement_id)
            async_dispatcher_send(
                self.hass,
                signal,
                {
                    const.DATA_ACHIEVEMENT_ID: achievement_id,
                    const.DATA_ACHIEVEMENT_TITLE: title,
                },
            )

    # -------------------------------------------------------------------------------------
    # Task Actions
    # -------------------------------------------------------------------------------------

    async def async_add_task(
        self, title: str, task_type: str = const.DEFAULT_TASK_TYPE
    ) -> TaskData:
        """Create a task and return it.

        Raises:
            ValueError: The title is empty after trimming.
            StorageError: Persisting failed.
        """
        async with self._lock:
            result = TaskEngine.create_task(
                self.tasks,
                self.creature,
                self.achievements,
                title,
                task_type,
                dt_util.utcnow(),
            )
            await self._async_apply(result)
        new_task = result.tasks[0]
        const.LOGGER.info(
            "INFO: Task '%s' added (type=%s)",
            new_task[const.DATA_TASK_TITLE],
            new_task[const.DATA_TASK_TYPE],
        )
        return new_task

    async def async_complete_task(self, task_id: str) -> bool:
        """Toggle a task's completion. Returns False for an unknown id.

        Completing a task releases any click punishment and clears the window.
        """
        async with self._lock:
            result = TaskEngine.complete_task(
                self.tasks, self.creature, self.achievements, task_id, dt_util.utcnow()
            )
            await self._async_apply(result)
            if result.completed:
                self._click_limiter.reset()
                # Limiter state is not persisted, so listeners need an explicit nudge.
                self.async_update_listeners()
        return result.changed

    async def async_delete_task(self, task_id: str) -> bool:
        """Delete a task. Returns False for an unknown id."""
        async with self._lock:
            result = TaskEngine.delete_task(
                self.tasks, self.creature, self.achievements, task_id, dt_util.utcnow()
            )
            await self._async_apply(result)
        return result.changed

    # -------------------------------------------------------------------------------------
    # Creature Actions
    # -------------------------------------------------------------------------------------

    async def async_click_creature(self) -> ClickDecision:
        """Click the creature, subject to the rate limiter.

        A rejected click changes nothing except refreshing listeners. An
        accepted click enters the limiter window only once it is persisted.
        """
        async with self._lock:
            now = dt_util.utcnow()
            task_count = self.creature[const.DATA_CREATURE_TASK_COUNT]
            decision = self._click_limiter.check_click(now, task_count)
            if not decision.accepted:
                const.LOGGER.debug("DEBUG: Click rejected, punishment in progress")
                self.async_update_listeners()
                return decision

            result = TaskEngine.click_creature(
                self.creature, self.achievements, decision.recent_clicks, now
            )
            await self._async_apply(result, keep_tasks=True)
            return self._click_limiter.record_click(now, task_count)

    # -------------------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------------------

    async def async_update_settings(
        self, reduce_motion: bool | None = None, theme: str | None = None
    ) -> None:
        """Update any provided settings and persist them."""
        async with self._lock:
            settings: SettingsData = dict(self.settings)  # type: ignore[assignment]
            if reduce_motion is not None:
                settings["reduce_motion"] = reduce_motion
            if theme is not None:
                settings["theme"] = theme
            if settings == self.settings:
                return
            await self._async_commit({**self._data, "settings": settings})

    # -------------------------------------------------------------------------------------
    # Export / Import / Clear
    # -------------------------------------------------------------------------------------

    def export_data(self) -> str:
        """Return the save document as indented JSON."""
        return export_save_file(self._data)

    async def async_import_data(self, json_str: str) -> None:
        """Replace all state with an imported save document.

        Raises:
            InvalidImportError: Malformed payload; state is unchanged.
            StorageError: Persisting failed; state is unchanged.
        """
        async with self._lock:
            imported = parse_import(
                json_str,
                self.creature.get(const.DATA_CREATURE_NAME, const.DEFAULT_CREATURE_NAME),
            )
            await self._async_commit(imported)
            self._click_limiter.reset()
        const.LOGGER.info(
            "INFO: Imported save document with %s tasks", len(imported["tasks"])
        )

    async def async_clear_data(self) -> None:
        """Delete stored data and start over with a default document."""
        async with self._lock:
            self._data = await self.store.async_clear()
            self._click_limiter.reset()
            self.async_set_updated_data(self._data)
