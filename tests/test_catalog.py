"""Tests for the static achievement catalog and its reconciliation."""

from __future__ import annotations

from custom_components.corn_cat import const
from custom_components.corn_cat.catalog import (
    ACHIEVEMENT_CATALOG,
    build_default_achievements,
    get_achievement_by_id,
    get_achievements_by_category,
    get_locked_achievements,
    get_unlocked_achievements,
    partition_achievements,
    reconcile_achievements,
)


class TestCatalogDefinitions:
    """Catalog shape and lookups."""

    def test_catalog_ids_are_unique(self) -> None:
        """Every catalog id appears once."""
        ids = [definition["id"] for definition in ACHIEVEMENT_CATALOG]
        assert len(ids) == len(set(ids)) == 31

    def test_every_definition_has_a_usable_rule(self) -> None:
        """Each entry names a known metric and a positive threshold."""
        metrics = {
            const.ACHIEVEMENT_METRIC_TASKS_COMPLETED,
            const.ACHIEVEMENT_METRIC_TASKS_CREATED,
            const.ACHIEVEMENT_METRIC_STREAK,
            const.ACHIEVEMENT_METRIC_VARIETY,
            const.ACHIEVEMENT_METRIC_CLICKS,
            const.ACHIEVEMENT_METRIC_RECENT_CLICKS,
        }
        for definition in ACHIEVEMENT_CATALOG:
            assert definition["metric"] in metrics
            assert definition["threshold"] > 0
            assert definition["category"] in const.ACHIEVEMENT_CATEGORY_OPTIONS

    def test_by_category_preserves_catalog_order(self) -> None:
        """Category filter keeps the declared order."""
        streaks = get_achievements_by_category(const.ACHIEVEMENT_CATEGORY_STREAKS)
        assert [d["id"] for d in streaks] == [
            "streak-2",
            "streak-3",
            "streak-7",
            "streak-14",
        ]

    def test_by_category_unknown_is_empty(self) -> None:
        """An unknown category yields nothing."""
        assert get_achievements_by_category("nope") == []

    def test_by_id(self) -> None:
        """Lookup by id returns the definition or None."""
        definition = get_achievement_by_id("clicks-10")
        assert definition is not None
        assert definition["metric"] == const.ACHIEVEMENT_METRIC_CLICKS
        assert definition["threshold"] == 10
        assert get_achievement_by_id("clicks-11") is None


class TestPartition:
    """Unlocked/locked splitting."""

    def test_default_achievements_are_all_locked(self) -> None:
        """A fresh list has nothing unlocked."""
        achievements = build_default_achievements()
        assert get_unlocked_achievements(achievements) == []
        assert len(get_locked_achievements(achievements)) == len(ACHIEVEMENT_CATALOG)

    def test_partition(self) -> None:
        """Partition splits on unlocked_at and keeps order."""
        achievements = build_default_achievements()
        achievements[3]["unlocked_at"] = "2025-01-10T10:00:00+00:00"
        achievements[0]["unlocked_at"] = "2025-01-09T10:00:00+00:00"

        unlocked, locked = partition_achievements(achievements)

        assert [a["id"] for a in unlocked] == [
            achievements[0]["id"],
            achievements[3]["id"],
        ]
        assert len(locked) == len(achievements) - 2


class TestReconcile:
    """Merging stored unlock timestamps against the catalog."""

    def test_none_yields_full_locked_catalog(self) -> None:
        """Nothing stored means every achievement is locked."""
        reconciled = reconcile_achievements(None)
        assert [a["id"] for a in reconciled] == [d["id"] for d in ACHIEVEMENT_CATALOG]
        assert all(a["unlocked_at"] is None for a in reconciled)

    def test_keeps_unlock_and_takes_metadata_from_catalog(self) -> None:
        """Stored titles are ignored, unlocked_at survives."""
        stored = [
            {
                "id": "tasks-completed-1",
                "title": "Tampered",
                "threshold": 999,
                "unlocked_at": "2025-01-10T10:00:00+00:00",
            }
        ]
        reconciled = reconcile_achievements(stored)
        first = reconciled[0]
        assert first["id"] == "tasks-completed-1"
        assert first["title"] == "First Task"
        assert first["threshold"] == 1
        assert first["unlocked_at"] == "2025-01-10T10:00:00+00:00"

    def test_drops_unknown_and_backfills_missing(self) -> None:
        """Unknown ids vanish and missing catalog ids come back locked."""
        stored = [
            {"id": "legacy-thing", "unlocked_at": "2025-01-10T10:00:00+00:00"},
            {"id": "clicks-10", "unlocked_at": "2025-01-10T10:00:00+00:00"},
        ]
        reconciled = reconcile_achievements(stored)

        assert len(reconciled) == len(ACHIEVEMENT_CATALOG)
        assert "legacy-thing" not in {a["id"] for a in reconciled}
        assert [a["id"] for a in get_unlocked_achievements(reconciled)] == ["clicks-10"]

    def test_ignores_malformed_entries(self) -> None:
        """Non-dict entries and non-string timestamps are treated as locked."""
        stored = [
            "clicks-10",
            {"id": "clicks-50", "unlocked_at": 12345},
            {"id": "clicks-100", "unlocked_at": ""},
        ]
        reconciled = reconcile_achievements(stored)
        assert get_unlocked_achievements(reconciled) == []

    def test_non_list_is_nothing_stored(self) -> None:
        """A dict where a list belongs is ignored."""
        reconciled = reconcile_achievements({"clicks-10": "2025-01-10"})
        assert get_unlocked_achievements(reconciled) == []
