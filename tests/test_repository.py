"""Tests for importing, updating, deleting and exporting themes."""

from __future__ import annotations

import json

import pytest

from loginthemes.errors import ErrorCode
from loginthemes.themes.repository import make_theme_id


def _sidecar(manager, theme_id: str) -> dict:
    path = manager.settings.themes_dir / f"{theme_id}.json"
    return json.loads(path.read_text(encoding="utf-8"))


def _active(manager) -> str:
    return manager.settings.login_css_path.read_bytes().decode("utf-8")


class TestMakeThemeId:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("My Theme!!", "my-theme"),
            ("  --Hello__World--  ", "hello__world"),
            ("樱花 Sakura", "樱花-sakura"),
            ("Café Noir", "caf-noir"),
            ("!!!", ""),
        ],
    )
    def test_sanitizes(self, name, expected):
        assert make_theme_id(name) == expected

    def test_truncates_without_trailing_hyphen(self):
        theme_id = make_theme_id("a" * 49 + " b")
        assert theme_id == "a" * 49
        assert len(make_theme_id("x" * 80)) == 50

    @pytest.mark.parametrize("name", ["My Theme!!", "樱花 Sakura", "a" * 49 + " bcd", "__x__"])
    def test_idempotent(self, name):
        once = make_theme_id(name)
        assert make_theme_id(once) == once


class TestImport:
    def test_import_writes_css_and_sidecar(self, manager):
        result = manager.repository.import_theme(
            "My Theme!!", "body{color:red}", {"author": "Ann", "description": "red"}
        )
        assert result.success
        assert result.theme_id == "my-theme"

        themes_dir = manager.settings.themes_dir
        assert (themes_dir / "my-theme.css").read_text(encoding="utf-8") == "body{color:red}"
        meta = _sidecar(manager, "my-theme")
        assert meta["name"] == "My Theme!!"
        assert meta["author"] == "Ann"
        assert meta["description"] == "red"
        assert meta["version"] == "1.0.0"
        assert meta["importedAt"].endswith("Z")

    def test_import_does_not_change_active_theme(self, manager, original_css):
        manager.repository.import_theme("Ocean", "body {}")
        assert manager.config_store.load().current_theme == "default"
        assert _active(manager) == original_css

    def test_import_conflict(self, manager):
        assert manager.repository.import_theme("My Theme", "a {}").success
        result = manager.repository.import_theme("my theme!", "b {}")
        assert not result.success
        assert result.code is ErrorCode.CONFLICT

    def test_import_default_name_conflicts(self, manager):
        result = manager.repository.import_theme("Default", "body{color:red}")
        assert result.code is ErrorCode.CONFLICT
        assert not (manager.settings.themes_dir / "default.css").exists()
        ids = [t.theme_id for t in manager.registry.list_themes()]
        assert ids.count("default") == 1

    @pytest.mark.parametrize("name", ["", "!!!", "_hidden"])
    def test_import_invalid_name(self, manager, name):
        result = manager.repository.import_theme(name, "a {}")
        assert result.code is ErrorCode.INVALID_INPUT

    def test_failed_sidecar_write_leaves_no_partial_theme(self, manager):
        # A directory squatting on the sidecar path makes the metadata write fail.
        (manager.settings.themes_dir / "ocean.json").mkdir()
        result = manager.repository.import_theme("Ocean", "body {}")
        assert result.code is ErrorCode.IO_FAILURE
        assert not (manager.settings.themes_dir / "ocean.css").exists()

        (manager.settings.themes_dir / "ocean.json").rmdir()
        assert manager.repository.import_theme("Ocean", "body {}").success

    def test_export_round_trip_is_byte_identical(self, manager):
        css = "/* @name Fancy */\r\nbody { color: red; }\n\n"
        theme_id = manager.repository.import_theme("Fancy", css).theme_id
        exported = manager.repository.export_theme(theme_id)
        assert exported.success
        assert exported.css == css
        assert exported.meta.name == "Fancy"


class TestUpdate:
    def test_update_missing_theme(self, manager):
        assert manager.repository.update_theme("ghost", "a {}").code is ErrorCode.NOT_FOUND
        assert manager.repository.update_theme("default", "a {}").code is ErrorCode.NOT_FOUND

    def test_update_merges_metadata(self, manager):
        manager.repository.import_theme("Ocean", "a {}", {"author": "Ann", "version": "1.2.0"})
        result = manager.repository.update_theme("ocean", "b {}", {"description": "new"})
        assert result.success

        meta = _sidecar(manager, "ocean")
        assert meta["author"] == "Ann"
        assert meta["version"] == "1.2.0"
        assert meta["description"] == "new"
        assert "importedAt" in meta
        assert "updatedAt" in meta
        assert (manager.settings.themes_dir / "ocean.css").read_text(encoding="utf-8") == "b {}"

    def test_update_without_metadata_keeps_sidecar(self, manager):
        manager.repository.import_theme("Ocean", "a {}")
        before = _sidecar(manager, "ocean")
        manager.repository.update_theme("ocean", "b {}")
        assert _sidecar(manager, "ocean") == before

    def test_update_with_missing_sidecar(self, manager):
        manager.repository.import_theme("Ocean", "a {}")
        (manager.settings.themes_dir / "ocean.json").unlink()
        manager.repository.update_theme("ocean", "a {}", {})
        meta = _sidecar(manager, "ocean")
        assert meta["author"] == "Unknown"
        assert meta["description"] == ""
        assert "updatedAt" in meta

    def test_update_active_theme_reapplies(self, manager):
        manager.repository.import_theme("Ocean", "a {}")
        manager.applier.apply_theme("ocean")
        manager.repository.update_theme("ocean", "b { color: teal; }")
        assert _active(manager) == "b { color: teal; }"

    def test_update_inactive_theme_leaves_stylesheet(self, manager, original_css):
        manager.repository.import_theme("Ocean", "a {}")
        manager.repository.update_theme("ocean", "b {}")
        assert _active(manager) == original_css


class TestDelete:
    def test_delete_default_forbidden(self, manager):
        result = manager.repository.delete_theme("default")
        assert result.code is ErrorCode.FORBIDDEN
        assert manager.registry.get_theme("default") is not None

    def test_delete_missing(self, manager):
        assert manager.repository.delete_theme("ghost").code is ErrorCode.NOT_FOUND

    def test_delete_removes_both_files(self, manager):
        manager.repository.import_theme("Ocean", "a {}")
        assert manager.repository.delete_theme("ocean").success
        themes_dir = manager.settings.themes_dir
        assert not (themes_dir / "ocean.css").exists()
        assert not (themes_dir / "ocean.json").exists()

    def test_delete_active_falls_back_to_default(self, manager, original_css):
        manager.repository.import_theme("Ocean", "a {}")
        manager.applier.apply_theme("ocean")
        assert manager.repository.delete_theme("ocean").success
        assert manager.config_store.load().current_theme == "default"
        assert _active(manager) == original_css


class TestExport:
    def test_export_default_uses_backup(self, manager, original_css):
        result = manager.repository.export_theme("default")
        assert result.success
        assert result.css == original_css
        assert result.meta.is_builtin is True

    def test_export_missing(self, manager):
        result = manager.repository.export_theme("ghost")
        assert result.code is ErrorCode.NOT_FOUND
        assert result.to_dict() == {"success": False, "error": "Theme not found: ghost"}


def test_end_to_end_scenario(manager, original_css):
    result = manager.repository.import_theme("My Theme!!", "body{color:red}")
    assert result.theme_id == "my-theme"
    listed = {t.theme_id: t for t in manager.registry.list_themes()}
    assert listed["my-theme"].is_builtin is False

    assert manager.applier.apply_theme("my-theme").success
    assert _active(manager) == "body{color:red}"
    assert manager.config_store.load().current_theme == "my-theme"

    assert manager.repository.delete_theme("my-theme").success
    assert _active(manager) == original_css
    assert manager.config_store.load().current_theme == "default"
