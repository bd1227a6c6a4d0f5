# File: const.py
"""Constants for the Corn Cat integration.

This file centralizes storage keys, defaults, task categories, achievement
metrics, service names and labels for consistency across the integration.
"""

import logging
from typing import Final

from homeassistant.const import Platform

# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
CORN_CAT_TITLE = "Corn Cat"

# Integration Domain
DOMAIN = "corn_cat"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.SENSOR,
]

# Coordinator
COORDINATOR = "coordinator"
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORE = "store"
STORAGE_KEY = "corn_cat_data"
STORAGE_VERSION = 1

# Save document version (written on every save, never branched on)
SAVE_FILE_VERSION = 1

# Tick interval (window pruning and punishment expiry)
TICK_INTERVAL_SECONDS = 1

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_CREATURE_NAME = "creature_name"

CONFIG_FLOW_STEP_USER = "user"

# ------------------------------------------------------------------------------------------------
# Save Document Keys
# ------------------------------------------------------------------------------------------------
DATA_VERSION = "version"
DATA_TASKS = "tasks"
DATA_CREATURE = "creature"
DATA_ACHIEVEMENTS = "achievements"
DATA_SETTINGS = "settings"

# Task
DATA_TASK_ID = "id"
DATA_TASK_TITLE = "title"
DATA_TASK_TYPE = "task_type"
DATA_TASK_CREATED_AT = "created_at"
DATA_TASK_COMPLETED_AT = "completed_at"

# Creature
DATA_CREATURE_ID = "id"
DATA_CREATURE_NAME = "name"
DATA_CREATURE_TASK_COUNT = "task_count"
DATA_CREATURE_CLICK_COUNT = "click_count"

# Achievement
DATA_ACHIEVEMENT_ID = "id"
DATA_ACHIEVEMENT_TITLE = "title"
DATA_ACHIEVEMENT_DESCRIPTION = "description"
DATA_ACHIEVEMENT_CATEGORY = "category"
DATA_ACHIEVEMENT_ICON = "icon"
DATA_ACHIEVEMENT_METRIC = "metric"
DATA_ACHIEVEMENT_THRESHOLD = "threshold"
DATA_ACHIEVEMENT_UNLOCKED_AT = "unlocked_at"

# Settings
DATA_SETTINGS_REDUCE_MOTION = "reduce_motion"
DATA_SETTINGS_THEME = "theme"

# Legacy keys (pre snake_case documents and the original "cat" record)
LEGACY_DATA_CAT = "cat"
LEGACY_DATA_TASK_TEXT = "text"
LEGACY_KEY_RENAMES: Final[dict[str, str]] = {
    "completedAt": DATA_TASK_COMPLETED_AT,
    "createdAt": DATA_TASK_CREATED_AT,
    "taskType": DATA_TASK_TYPE,
    "taskCount": DATA_CREATURE_TASK_COUNT,
    "clickCount": DATA_CREATURE_CLICK_COUNT,
    "unlockedAt": DATA_ACHIEVEMENT_UNLOCKED_AT,
    "reduceMotion": DATA_SETTINGS_REDUCE_MOTION,
}

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_ZERO = 0
DEFAULT_CREATURE_ID = "cat"
DEFAULT_CREATURE_NAME = "Cat"
DEFAULT_REDUCE_MOTION = False
# Stored tasks missing created_at fall back to completed_at, else the epoch
DEFAULT_TASK_CREATED_AT = "1970-01-01T00:00:00+00:00"

THEME_DARK = "dark"
THEME_LIGHT = "light"
THEME_OPTIONS = [THEME_DARK, THEME_LIGHT]
DEFAULT_THEME = THEME_DARK

# ------------------------------------------------------------------------------------------------
# Task Types
# ------------------------------------------------------------------------------------------------
TASK_TYPE_WORK = "work"
TASK_TYPE_HEALTH = "health"
TASK_TYPE_SOCIAL = "social"
TASK_TYPE_LEARNING = "learning"
TASK_TYPE_HOBBY = "hobby"
TASK_TYPE_CHORE = "chore"
TASK_TYPE_FINANCE = "finance"
TASK_TYPE_PERSONAL = "personal"
TASK_TYPE_CREATIVE = "creative"
TASK_TYPE_TRAVEL = "travel"
TASK_TYPE_OTHER = "other"

TASK_TYPE_OPTIONS = [
    TASK_TYPE_WORK,
    TASK_TYPE_HEALTH,
    TASK_TYPE_SOCIAL,
    TASK_TYPE_LEARNING,
    TASK_TYPE_HOBBY,
    TASK_TYPE_CHORE,
    TASK_TYPE_FINANCE,
    TASK_TYPE_PERSONAL,
    TASK_TYPE_CREATIVE,
    TASK_TYPE_TRAVEL,
    TASK_TYPE_OTHER,
]
DEFAULT_TASK_TYPE = TASK_TYPE_OTHER

# Keyword lists used to categorize legacy tasks that predate task_type.
# Checked in order; the first category with a matching keyword wins.
TASK_TYPE_KEYWORDS: Final[dict[str, tuple[str, ...]]] = {
    TASK_TYPE_WORK: ("work", "job", "office", "meeting"),
    TASK_TYPE_HEALTH: ("health", "exercise", "gym", "workout", "doctor"),
    TASK_TYPE_SOCIAL: ("social", "friend", "party", "date", "family"),
    TASK_TYPE_LEARNING: ("learn", "study", "read", "course", "class"),
    TASK_TYPE_HOBBY: ("hobby", "game", "craft", "music", "art"),
    TASK_TYPE_CHORE: ("chore", "clean", "laundry", "dishes", "grocery"),
    TASK_TYPE_FINANCE: ("finance", "money", "bill", "budget", "save"),
    TASK_TYPE_PERSONAL: ("personal", "self", "meditation", "goal"),
    TASK_TYPE_CREATIVE: ("creative", "write", "draw", "design", "paint"),
    TASK_TYPE_TRAVEL: ("travel", "trip", "vacation", "flight"),
}

# ------------------------------------------------------------------------------------------------
# Achievements
# ------------------------------------------------------------------------------------------------
ACHIEVEMENT_CATEGORY_TASKS = "tasks"
ACHIEVEMENT_CATEGORY_STREAKS = "streaks"
ACHIEVEMENT_CATEGORY_VARIETY = "variety"
ACHIEVEMENT_CATEGORY_CLICKS = "clicks"
ACHIEVEMENT_CATEGORY_PROCRASTINATOR = "procrastinator"

ACHIEVEMENT_CATEGORY_OPTIONS = [
    ACHIEVEMENT_CATEGORY_TASKS,
    ACHIEVEMENT_CATEGORY_STREAKS,
    ACHIEVEMENT_CATEGORY_VARIETY,
    ACHIEVEMENT_CATEGORY_CLICKS,
    ACHIEVEMENT_CATEGORY_PROCRASTINATOR,
]

# Observed value each achievement compares against its threshold
ACHIEVEMENT_METRIC_TASKS_COMPLETED = "tasks_completed"
ACHIEVEMENT_METRIC_TASKS_CREATED = "tasks_created"
ACHIEVEMENT_METRIC_STREAK = "streak"
ACHIEVEMENT_METRIC_VARIETY = "variety"
ACHIEVEMENT_METRIC_CLICKS = "clicks"
ACHIEVEMENT_METRIC_RECENT_CLICKS = "recent_clicks"

# ------------------------------------------------------------------------------------------------
# Creature Growth
# ------------------------------------------------------------------------------------------------
CREATURE_STAGE_THRESHOLDS: Final[tuple[int, ...]] = (
    1, 2, 3, 5, 7, 10, 15, 20, 25, 30, 40, 50, 60, 75, 90, 100,
)  # fmt: skip

# ------------------------------------------------------------------------------------------------
# Click Rate Limiting
# ------------------------------------------------------------------------------------------------
CLICK_WINDOW_SECONDS = 60
CLICK_PUNISHMENT_SECONDS = 60
CLICK_BASE_ALLOWANCE = 30
CLICK_ALLOWANCE_PER_TASK = 10

CLICK_STATE_NORMAL = "normal"
CLICK_STATE_PUNISHED = "punished"

# ------------------------------------------------------------------------------------------------
# Dispatcher Signals
# ------------------------------------------------------------------------------------------------
SIGNAL_SUFFIX_ACHIEVEMENT_UNLOCKED = "achievement_unlocked"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_ADD_TASK = "add_task"
SERVICE_COMPLETE_TASK = "complete_task"
SERVICE_DELETE_TASK = "delete_task"
SERVICE_CLICK_CREATURE = "click_creature"
SERVICE_UPDATE_SETTINGS = "update_settings"
SERVICE_EXPORT_DATA = "export_data"
SERVICE_IMPORT_DATA = "import_data"
SERVICE_CLEAR_DATA = "clear_data"

FIELD_TASK_ID = "task_id"
FIELD_TITLE = "title"
FIELD_TASK_TYPE = "task_type"
FIELD_REDUCE_MOTION = "reduce_motion"
FIELD_THEME = "theme"
FIELD_JSON = "json"

RESPONSE_SAVE_FILE = "save_file"
RESPONSE_JSON = "json"

# ------------------------------------------------------------------------------------------------
# Sensors
# ------------------------------------------------------------------------------------------------
SENSOR_UID_SUFFIX_TASKS_COMPLETED = "_tasks_completed"
SENSOR_UID_SUFFIX_CLICK_COUNT = "_click_count"
SENSOR_UID_SUFFIX_STREAK = "_streak"
SENSOR_UID_SUFFIX_VARIETY = "_variety"
SENSOR_UID_SUFFIX_ACHIEVEMENTS = "_achievements"
SENSOR_UID_SUFFIX_CLICK_STATUS = "_click_status"

TRANS_KEY_SENSOR_TASKS_COMPLETED = "tasks_completed"
TRANS_KEY_SENSOR_CLICK_COUNT = "click_count"
TRANS_KEY_SENSOR_STREAK = "streak"
TRANS_KEY_SENSOR_VARIETY = "variety"
TRANS_KEY_SENSOR_ACHIEVEMENTS = "achievements"
TRANS_KEY_SENSOR_CLICK_STATUS = "click_status"

ATTR_STAGE = "stage"
ATTR_OPEN_TASKS = "open_tasks"
ATTR_TOTAL_TASKS = "total_tasks"
ATTR_UNLOCKED = "unlocked"
ATTR_LOCKED = "locked"
ATTR_TOTAL = "total"
ATTR_CLICKS_USED = "clicks_used"
ATTR_CLICK_ALLOWANCE = "click_allowance"
ATTR_PUNISHMENT_SECONDS_LEFT = "punishment_seconds_left"
ATTR_CREATURE_NAME = "creature_name"

# ------------------------------------------------------------------------------------------------
# Errors / Messages
# ------------------------------------------------------------------------------------------------
ERROR_EMPTY_TITLE = "Task title must not be empty"
ERROR_INVALID_IMPORT = "Invalid file: {}"
ERROR_STORAGE = "Storage error: {}"
MSG_NO_ENTRY_FOUND = "No Corn Cat entry found"

TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"
TRANS_KEY_ERROR_INVALID_NAME = "invalid_name"
