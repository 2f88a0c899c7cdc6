"""
Application Paths - Centralized path definitions cho repo-flattener

Module nay dinh nghia tat ca cac duong dan va ten bien moi truong su dung
trong ung dung. Tap trung o mot noi de tranh hardcode rai rac.

UI assets nam trong package web/ (package data, duoc cai cung wheel):
- web/templates/ : Jinja2 templates (index.html)
- web/static/    : Static assets (app.js, style.css)
"""

from pathlib import Path


# =============================================================================
# Ten ung dung - Single source of truth cho naming
# =============================================================================
APP_NAME = "repo-flattener"
APP_VERSION = "0.3.0"

# =============================================================================
# Thu muc goc cua project va package web/ (chua templates/ va static/)
# =============================================================================
PROJECT_DIR = Path(__file__).resolve().parent.parent
WEB_DIR = PROJECT_DIR / "web"

TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"

# =============================================================================
# Environment Variables - Chi doc MOT LAN khi khoi dong (xem app_settings.py)
# =============================================================================
BASE_DIR_ENV_VAR = "DATA_DIR_BASE"
LOG_LEVEL_ENV_VAR = "LOG_LEVEL"
LOG_DIR_ENV_VAR = "LOG_DIR"
TIMEOUT_ENV_VAR = "REQUEST_TIMEOUT_SECS"
HOST_ENV_VAR = "HOST"
PORT_ENV_VAR = "PORT"
