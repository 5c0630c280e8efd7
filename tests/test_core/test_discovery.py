"""Tests for modorder.core.discovery module.

Test Coverage:
- Reading About.json into descriptors
- Folder-name fallbacks for missing ids and unreadable metadata
- Reserved and hidden folders
- Preview image detection
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from modorder.core.discovery import (
    DiscoveredPackage,
    discover_package,
    discover_packages,
    read_about,
)
from modorder.exceptions import FileOperationError, ParseError


@pytest.mark.unit
class TestReadAbout:
    """Tests for read_about."""

    def test_reads_object(self, make_mod) -> None:
        mod_dir = make_mod("Core", {"id": "core"})

        assert read_about(mod_dir / "About" / "About.json") == {"id": "core"}

    def test_strips_byte_order_mark(self, tmp_path: Path) -> None:
        path = tmp_path / "About.json"
        path.write_bytes(b'\xef\xbb\xbf{"id": "core"}')

        assert read_about(path) == {"id": "core"}

    def test_invalid_json(self, make_mod) -> None:
        mod_dir = make_mod("Broken", raw='{"id": "core",\n')

        with pytest.raises(ParseError) as exc_info:
            read_about(mod_dir / "About" / "About.json")

        assert exc_info.value.file_path.endswith("About.json")
        assert exc_info.value.line_number is not None

    def test_non_object(self, make_mod) -> None:
        mod_dir = make_mod("List", raw="[1, 2]")

        with pytest.raises(ParseError, match="Expected a JSON object"):
            read_about(mod_dir / "About" / "About.json")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileOperationError):
            read_about(tmp_path / "missing.json")


@pytest.mark.unit
class TestDiscoverPackage:
    """Tests for discover_package."""

    def test_full_metadata(self, make_mod) -> None:
        mod_dir = make_mod(
            "Addon",
            {
                "id": "Com.Example.Addon",
                "name": "Addon",
                "version": "1.2.0",
                "dependsOn": ["com.example.core>=1.0"],
                "loadBefore": ["late"],
                "loadAfter": ["early"],
                "author": "someone",
            },
        )

        discovered = discover_package(mod_dir)

        assert isinstance(discovered, DiscoveredPackage)
        assert discovered.has_about
        assert discovered.status_message is None
        descriptor = discovered.descriptor
        assert discovered.id == descriptor.id == "com.example.addon"
        assert descriptor.version == "1.2.0"
        assert descriptor.depends_on == ("com.example.core>=1.0",)
        assert descriptor.load_before == ("late",)
        assert descriptor.load_after == ("early",)
        assert descriptor.root_path == str(mod_dir)
        assert descriptor.metadata == {"author": "someone"}

    def test_blank_id_uses_folder_name(self, make_mod) -> None:
        mod_dir = make_mod("MyMod", {"id": "  ", "name": "Pretty Name"})

        discovered = discover_package(mod_dir)

        assert discovered.id == "mymod"
        assert discovered.descriptor.name == "Pretty Name"
        assert discovered.has_about

    def test_missing_about(self, make_mod) -> None:
        mod_dir = make_mod("NoAbout")

        discovered = discover_package(mod_dir)

        assert not discovered.has_about
        assert discovered.id == "noabout"
        assert discovered.status_message == "Missing About.json"

    def test_invalid_about_logged(self, make_mod, caplog: pytest.LogCaptureFixture) -> None:
        mod_dir = make_mod("Broken", raw="not json")

        with caplog.at_level(logging.WARNING, logger="modorder"):
            discovered = discover_package(mod_dir)

        assert discovered.status_message == "Invalid About.json"
        assert discovered.id == "broken"
        assert "Could not read" in caplog.text

    def test_wrongly_typed_fields_ignored(self, make_mod) -> None:
        mod_dir = make_mod(
            "Odd",
            {"id": "odd", "version": 12, "dependsOn": "core", "loadAfter": ["a", 3]},
        )

        descriptor = discover_package(mod_dir).descriptor

        assert descriptor.version is None
        assert descriptor.depends_on == ()
        assert descriptor.load_after == ("a",)

    def test_preview_detected(self, make_mod) -> None:
        mod_dir = make_mod("Pic", {"id": "pic"})
        (mod_dir / "About" / "preview.png").write_bytes(b"\x89PNG")

        assert discover_package(mod_dir).preview_path == mod_dir / "About" / "preview.png"


@pytest.mark.unit
class TestDiscoverPackages:
    """Tests for discover_packages."""

    def test_lists_folders_in_name_order(self, make_mod, mods_root: Path) -> None:
        make_mod("b_mod", {"id": "b"})
        make_mod("A_mod", {"id": "a"})
        make_mod("c_mod")

        ids = [mod.id for mod in discover_packages(mods_root)]

        assert ids == ["a", "b", "c_mod"]

    def test_skips_reserved_hidden_and_files(self, make_mod, mods_root: Path) -> None:
        make_mod("real", {"id": "real"})
        make_mod("Disabled", {"id": "hidden-by-name"})
        make_mod(".git", {"id": "dot"})
        (mods_root / "loadorder.json").write_text("{}", encoding="utf-8")

        assert [mod.id for mod in discover_packages(mods_root)] == ["real"]

    def test_missing_root(self, tmp_path: Path) -> None:
        assert discover_packages(tmp_path / "nope") == []
