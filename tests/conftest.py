from __future__ import annotations

from pathlib import Path

import pytest

from loginthemes.config.settings import PluginSettings
from loginthemes.themes.manager import LoginThemeManager

ORIGINAL_CSS = "body.login { background: #123456; }\r\n/* original */\n"


@pytest.fixture
def settings(tmp_path: Path) -> PluginSettings:
    host_root = tmp_path / "host"
    plugin_dir = host_root / "plugins" / "login-themes"
    plugin_dir.mkdir(parents=True)
    return PluginSettings.from_plugin_dir(plugin_dir)


@pytest.fixture
def login_css(settings: PluginSettings) -> Path:
    path = settings.login_css_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(ORIGINAL_CSS.encode("utf-8"))
    return path


@pytest.fixture
def manager(settings: PluginSettings, login_css: Path) -> LoginThemeManager:
    mgr = LoginThemeManager(settings)
    mgr.initialize()
    return mgr


@pytest.fixture
def original_css() -> str:
    return ORIGINAL_CSS
