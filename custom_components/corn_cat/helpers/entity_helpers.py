# File: helpers/entity_helpers.py
"""Signal naming helpers for Corn Cat."""

from __future__ import annotations

from .. import const


def get_event_signal(entry_id: str, suffix: str) -> str:
    """Build an instance-scoped dispatcher signal name.

    Format: 'corn_cat_{entry_id}_{suffix}'

    Args:
        entry_id: ConfigEntry.entry_id of the integration instance
        suffix: Signal suffix constant from const.py

    Example:
        >>> get_event_signal("abc123", const.SIGNAL_SUFFIX_ACHIEVEMENT_UNLOCKED)
        'corn_cat_abc123_achievement_unlocked'
    """
    return f"{const.DOMAIN}_{entry_id}_{suffix}"
