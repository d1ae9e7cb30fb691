from __future__ import annotations

from pathlib import Path

from loginthemes import runtime_paths


def test_package_root_points_to_package() -> None:
    root = runtime_paths.package_root()
    assert root.name == "loginthemes"
    assert (root / "themes").exists()


def test_plugin_root_defaults_to_package_parent(monkeypatch) -> None:
    monkeypatch.delenv(runtime_paths.PLUGIN_DIR_ENV, raising=False)
    assert runtime_paths.plugin_root() == runtime_paths.package_root().parent


def test_plugin_root_env_override(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv(runtime_paths.PLUGIN_DIR_ENV, str(tmp_path))
    assert runtime_paths.plugin_root() == tmp_path.resolve()


def test_host_root_is_two_levels_up(tmp_path: Path) -> None:
    plugin_dir = tmp_path / "host" / "plugins" / "login-themes"
    assert runtime_paths.host_root_for(plugin_dir) == (tmp_path / "host").resolve()
    assert runtime_paths.login_stylesheet_path(tmp_path).parts[-3:] == ("public", "css", "login.css")
