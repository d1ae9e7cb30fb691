"""HTTP binding for the theme manager."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from loginthemes.errors import ErrorCode
from loginthemes.themes.manager import LoginThemeManager

logger = logging.getLogger(__name__)


class ApplyRequest(BaseModel):
    themeId: Optional[str] = None


class ImportRequest(BaseModel):
    name: Optional[str] = None
    css: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class UpdateRequest(BaseModel):
    themeId: Optional[str] = None
    css: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


def _error(status_code: int, message: str, *, with_flag: bool = True) -> JSONResponse:
    body: dict[str, Any] = {"error": message}
    if with_flag:
        body = {"success": False, **body}
    return JSONResponse(status_code=status_code, content=body)


def build_router(manager: LoginThemeManager) -> APIRouter:
    router = APIRouter()

    @router.get("/list")
    def list_themes():
        try:
            return manager.list_payload()
        except Exception as exc:
            logger.exception("Error listing themes")
            return _error(500, str(exc), with_flag=False)

    @router.get("/current")
    def current_theme():
        try:
            return manager.current_payload()
        except Exception as exc:
            logger.exception("Error reading current theme")
            return _error(500, str(exc), with_flag=False)

    @router.post("/apply")
    def apply_theme(payload: ApplyRequest):
        if not payload.themeId:
            return _error(400, "themeId is required")
        try:
            return manager.applier.apply_theme(payload.themeId).to_dict(id_key="theme")
        except Exception as exc:
            logger.exception("Error applying theme")
            return _error(500, str(exc))

    @router.post("/import")
    def import_theme(payload: ImportRequest):
        if not payload.name or not payload.css:
            return _error(400, "name and css are required")
        try:
            result = manager.repository.import_theme(payload.name, payload.css, payload.metadata or {})
            return result.to_dict()
        except Exception as exc:
            logger.exception("Error importing theme")
            return _error(500, str(exc))

    @router.post("/update")
    def update_theme(payload: UpdateRequest):
        if not payload.themeId or not payload.css:
            return _error(400, "themeId and css are required")
        try:
            result = manager.repository.update_theme(payload.themeId, payload.css, payload.metadata)
        except Exception as exc:
            logger.exception("Error updating theme")
            return _error(500, str(exc))
        if result.success:
            return result.to_dict()
        if result.code is ErrorCode.NOT_FOUND:
            return _error(404, "Theme not found")
        return _error(500, result.message)

    @router.delete("/delete/{theme_id}")
    def delete_theme(theme_id: str):
        try:
            return manager.repository.delete_theme(theme_id).to_dict()
        except Exception as exc:
            logger.exception("Error deleting theme")
            return _error(500, str(exc))

    @router.get("/export/{theme_id}")
    def export_theme(theme_id: str):
        try:
            result = manager.repository.export_theme(theme_id)
        except Exception as exc:
            logger.exception("Error exporting theme")
            return _error(500, str(exc))
        if result.success:
            return result.to_dict()
        return JSONResponse(status_code=404, content=result.to_dict())

    @router.get("/preview/{theme_id}")
    def preview_theme(theme_id: str):
        try:
            result = manager.repository.export_theme(theme_id)
        except Exception:
            logger.exception("Error loading theme preview")
            return Response("/* Error loading theme */", status_code=500, media_type="text/css")
        if result.success:
            return Response(result.css, media_type="text/css")
        return Response("/* Theme not found */", status_code=404, media_type="text/css")

    return router
