"""FastAPI application bootstrap."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI

from loginthemes import __version__
from loginthemes.config.settings import PluginSettings, load_settings
from loginthemes.routes import build_router
from loginthemes.themes.manager import LoginThemeManager


def configure_logging(settings: PluginSettings) -> logging.Logger:
    logger = logging.getLogger("loginthemes")
    logger.setLevel(settings.log_level)
    if logger.handlers:
        return logger

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        settings.log_dir / "login_themes.log",
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    return logger


def create_app(settings: PluginSettings | None = None) -> FastAPI:
    """Initialize theme storage and mount the API."""
    settings = settings or load_settings()
    logger = configure_logging(settings)
    logger.info("Initializing login theme manager")
    logger.info("plugin_dir=%s themes_dir=%s", settings.plugin_dir, settings.themes_dir)
    logger.info("login stylesheet=%s", settings.login_css_path)

    manager = LoginThemeManager(settings)
    manager.initialize()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        logger.info("Login theme manager unloaded")

    app = FastAPI(title="Login Theme Manager", version=__version__, lifespan=lifespan)
    app.state.theme_manager = manager
    app.include_router(build_router(manager), prefix=settings.mount_path)

    logger.info("API available at %s/", settings.mount_path)
    return app
