# File: store.py
"""Handles persistent data storage for the Corn Cat integration.

Uses Home Assistant's Storage helper to save and load the save document
(tasks, creature, achievements and settings), ensuring state is preserved
across restarts.

Stored documents are never trusted: every load goes through reconcile(),
which migrates legacy layouts and then rebuilds the document field by field
against the current schema.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.storage import Store

from . import const
from .catalog import build_default_achievements, reconcile_achievements
from .engines.statistics_engine import StatisticsEngine
from .migration import migrate_legacy_document

if TYPE_CHECKING:
    from homeassistant.core import HomeAssistant

    from .type_defs import CreatureData, SaveFileData, SettingsData, TaskData


class StorageError(HomeAssistantError):
    """Raised when the storage backend fails to load, save or clear."""


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class CornCatStore:
    """Handles persistent storage operations for Corn Cat data.

    Thin wrapper around Home Assistant's Store API. Keeps the last loaded or
    saved document in memory for quick access.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        storage_key: str = const.STORAGE_KEY,
        creature_name: str = const.DEFAULT_CREATURE_NAME,
    ) -> None:
        """Initialize the store.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY).
            creature_name: Name given to the creature of a fresh document.

        """
        self.hass = hass
        self._storage_key = storage_key
        self._creature_name = creature_name
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)
        self._data: SaveFileData = self.get_default_structure(creature_name)

    @staticmethod
    def get_default_structure(
        creature_name: str = const.DEFAULT_CREATURE_NAME,
    ) -> SaveFileData:
        """Return the canonical empty save document for fresh installations.

        This is the SINGLE SOURCE OF TRUTH for the Corn Cat storage schema.
        """
        return {
            "version": const.SAVE_FILE_VERSION,
            "tasks": [],
            "creature": {
                "id": const.DEFAULT_CREATURE_ID,
                "name": creature_name,
                "task_count": const.DEFAULT_ZERO,
                "click_count": const.DEFAULT_ZERO,
            },
            "achievements": build_default_achievements(),
            "settings": {
                "reduce_motion": const.DEFAULT_REDUCE_MOTION,
                "theme": const.DEFAULT_THEME,
            },
        }

    # -------------------------------------------------------------------------
    # Reconciliation
    # -------------------------------------------------------------------------

    @staticmethod
    def _reconcile_tasks(stored: Any) -> list[TaskData]:
        tasks: list[TaskData] = []
        if not isinstance(stored, list):
            return tasks
        for entry in stored:
            if not isinstance(entry, dict):
                continue
            task_id = entry.get(const.DATA_TASK_ID)
            if not isinstance(task_id, str) or not task_id:
                const.LOGGER.debug("DEBUG: Dropping stored task without an id")
                continue
            title = entry.get(const.DATA_TASK_TITLE)
            task_type = entry.get(const.DATA_TASK_TYPE)
            created_at = entry.get(const.DATA_TASK_CREATED_AT)
            completed_at = entry.get(const.DATA_TASK_COMPLETED_AT)
            if not isinstance(completed_at, str) or not completed_at:
                completed_at = None
            if not isinstance(created_at, str):
                created_at = completed_at or const.DEFAULT_TASK_CREATED_AT
            tasks.append(
                {
                    "id": task_id,
                    "title": title if isinstance(title, str) else "",
                    "task_type": (
                        task_type
                        if task_type in const.TASK_TYPE_OPTIONS
                        else const.DEFAULT_TASK_TYPE
                    ),
                    "created_at": created_at,
                    "completed_at": completed_at,
                }
            )
        return tasks

    @staticmethod
    def _reconcile_creature(
        stored: Any, tasks: list[TaskData], default: CreatureData
    ) -> CreatureData:
        creature = stored if isinstance(stored, dict) else {}
        creature_id = creature.get(const.DATA_CREATURE_ID)
        name = creature.get(const.DATA_CREATURE_NAME)
        click_count = creature.get(const.DATA_CREATURE_CLICK_COUNT)
        return {
            "id": creature_id if isinstance(creature_id, str) else default["id"],
            "name": name if isinstance(name, str) else default["name"],
            # Always derived, so a corrupted stored count heals itself.
            "task_count": StatisticsEngine.get_completed_count(tasks),
            "click_count": click_count if _is_count(click_count) else 0,
        }

    @staticmethod
    def _reconcile_settings(stored: Any) -> SettingsData:
        settings = stored if isinstance(stored, dict) else {}
        reduce_motion = settings.get(const.DATA_SETTINGS_REDUCE_MOTION)
        theme = settings.get(const.DATA_SETTINGS_THEME)
        return {
            "reduce_motion": (
                reduce_motion
                if isinstance(reduce_motion, bool)
                else const.DEFAULT_REDUCE_MOTION
            ),
            "theme": theme if theme in const.THEME_OPTIONS else const.DEFAULT_THEME,
        }

    @staticmethod
    def reconcile(
        raw: Any, creature_name: str = const.DEFAULT_CREATURE_NAME
    ) -> SaveFileData:
        """Rebuild a stored (or imported) document against the current schema.

        Each field is checked individually: a present value of the right type
        is kept even when falsy (0, False, empty list); a missing or mistyped
        value falls back to its default. Legacy layouts are migrated first.
        """
        default = CornCatStore.get_default_structure(creature_name)
        if not isinstance(raw, dict):
            const.LOGGER.warning(
                "WARNING: Stored document is not an object, using defaults"
            )
            return default

        document = migrate_legacy_document(raw)
        tasks = CornCatStore._reconcile_tasks(document.get(const.DATA_TASKS))
        return {
            "version": const.SAVE_FILE_VERSION,
            "tasks": tasks,
            "creature": CornCatStore._reconcile_creature(
                document.get(const.DATA_CREATURE), tasks, default["creature"]
            ),
            "achievements": reconcile_achievements(
                document.get(const.DATA_ACHIEVEMENTS)
            ),
            "settings": CornCatStore._reconcile_settings(
                document.get(const.DATA_SETTINGS)
            ),
        }

    # -------------------------------------------------------------------------
    # Backend Operations
    # -------------------------------------------------------------------------

    async def async_load(self) -> SaveFileData:
        """Load the save document from storage.

        Returns the default document when nothing is stored.

        Raises:
            StorageError: The storage backend failed.
        """
        const.LOGGER.debug("DEBUG: CornCatStore: Loading data from storage")
        try:
            existing_data = await self._store.async_load()
        except (OSError, TypeError, ValueError, HomeAssistantError) as err:
            const.LOGGER.error(
                "ERROR: Failed to load storage %s: %s", self._store.path, err
            )
            raise StorageError(const.ERROR_STORAGE.format(err)) from err

        if existing_data is None:
            const.LOGGER.info("INFO: No existing storage found. Initializing new data")
            self._data = self.get_default_structure(self._creature_name)
        else:
            self._data = self.reconcile(existing_data, self._creature_name)
            const.LOGGER.debug(
                "DEBUG: Loaded existing data from storage: %s tasks, %s unlocked achievements",
                len(self._data["tasks"]),
                sum(
                    1
                    for achievement in self._data["achievements"]
                    if achievement["unlocked_at"] is not None
                ),
            )
        return self._data

    async def async_save(self, data: SaveFileData) -> None:
        """Persist a save document.

        The in-memory copy is only replaced once the write succeeded.

        Raises:
            StorageError: The storage backend failed (file system error or
                non-serializable data).
        """
        document: SaveFileData = {**data, "version": const.SAVE_FILE_VERSION}
        try:
            await self._store.async_save(document)
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                self._store.path,
            )
            raise StorageError(const.ERROR_STORAGE.format(err)) from err
        except (TypeError, ValueError, HomeAssistantError) as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to invalid data: %s", err
            )
            raise StorageError(const.ERROR_STORAGE.format(err)) from err
        self._data = document
        const.LOGGER.debug("DEBUG: Data saved successfully to storage")

    async def async_clear(self) -> SaveFileData:
        """Remove the stored document and reset to the default structure.

        Raises:
            StorageError: The storage file could not be removed.
        """
        const.LOGGER.warning("WARNING: Clearing all Corn Cat data and resetting storage")
        try:
            await self._store.async_remove()
        except (OSError, HomeAssistantError) as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._store.path,
                err,
            )
            raise StorageError(const.ERROR_STORAGE.format(err)) from err
        self._data = self.get_default_structure(self._creature_name)
        return self._data

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def data(self) -> SaveFileData:
        """Retrieve the in-memory data cache."""
        return self._data

    def get_storage_path(self) -> str:
        """Get the storage file path."""
        return self._store.path
