"""Unit tests for modorder.models.load_order module."""

from __future__ import annotations

import pytest

from modorder.models.load_order import LoadOrderFile, ModStatusEntry


@pytest.mark.unit
class TestModStatusEntry:
    """Tests for ModStatusEntry.from_json."""

    def test_defaults(self) -> None:
        assert ModStatusEntry.from_json({}) == ModStatusEntry(True, False, None)

    def test_values(self) -> None:
        entry = ModStatusEntry.from_json({"enabled": False, "locked": True, "notes": "hi"})

        assert entry == ModStatusEntry(enabled=False, locked=True, notes="hi")

    def test_wrong_types_fall_back(self) -> None:
        entry = ModStatusEntry.from_json({"enabled": "no", "locked": 1, "notes": 3})

        assert entry == ModStatusEntry()


@pytest.mark.unit
class TestLoadOrderFile:
    """Tests for LoadOrderFile."""

    @pytest.mark.parametrize("data", [None, [], "order", 3, {"order": "core"}])
    def test_unusable_documents(self, data) -> None:
        assert LoadOrderFile.from_json(data).order == []

    def test_order_normalized_and_deduplicated(self) -> None:
        load_order = LoadOrderFile.from_json({"order": ["Core", " core ", "", None, "ui"]})

        assert load_order.order == ["core", "ui"]

    def test_mods_entries(self) -> None:
        load_order = LoadOrderFile.from_json(
            {
                "order": [],
                "mods": [
                    {"id": "Core", "locked": True},
                    {"id": ""},
                    "junk",
                    {"enabled": False},
                ],
            }
        )

        assert list(load_order.mods) == ["core"]
        assert load_order.mods["core"].locked is True

    def test_to_json_shape(self) -> None:
        load_order = LoadOrderFile(order=["a"], mods={"a": ModStatusEntry(locked=True)})

        assert load_order.to_json() == {
            "order": ["a"],
            "mods": [{"id": "a", "enabled": True, "locked": True, "notes": None}],
        }

    def test_index_of(self) -> None:
        load_order = LoadOrderFile(order=["a", "b"])

        assert load_order.index_of(" B ") == 1
        assert load_order.index_of("ghost") == -1
