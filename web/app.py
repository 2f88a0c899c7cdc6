"""
FastAPI application wiring cho repo-flattener.

- Luu AppSettings vao app.state (doc environment MOT LAN)
- Cau hinh logging process-wide tu settings
- GET / render web/templates/index.html (Jinja2)
- Mount static assets tai /static
- API router tai /api

Chay:
    uvicorn web.app:create_app --factory
"""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from config.app_settings import AppSettings
from config.paths import APP_NAME, APP_VERSION, STATIC_DIR, TEMPLATES_DIR
from core.logging_config import log_info, setup_logging
from web.routes import get_api_router


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """
    Tao FastAPI application.

    Args:
        settings: AppSettings da load; None = doc tu environment

    Returns:
        FastAPI app da wire routers, templates va static files
    """
    if settings is None:
        settings = AppSettings.from_env()

    setup_logging(settings.log_level, settings.log_dir)

    app = FastAPI(title=APP_NAME, version=APP_VERSION)
    app.state.settings = settings

    app.include_router(get_api_router(), prefix="/api")

    index_template = TEMPLATES_DIR / "index.html"
    if index_template.is_file():
        templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
        app.state.templates = templates

        @app.get("/", response_class=HTMLResponse)
        def index(request: Request) -> Any:
            return templates.TemplateResponse(
                request,
                "index.html",
                {
                    "app_name": APP_NAME,
                    "version": APP_VERSION,
                    "default_ignore_patterns": list(settings.default_ignore_patterns),
                },
            )

    else:

        @app.get("/")
        def hello() -> Any:
            return JSONResponse(
                {
                    "name": APP_NAME,
                    "ok": True,
                    "version": APP_VERSION,
                    "ui": "not mounted (templates/index.html not found)",
                }
            )

    if STATIC_DIR.is_dir():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    log_info(f"[App] {APP_NAME} {APP_VERSION} ready, base dir: {settings.base_dir}")
    return app
