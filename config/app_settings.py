"""
AppSettings - Typed settings dataclass cho repo-flattener.

Tat ca cau hinh process-wide duoc doc tu environment MOT LAN khi khoi dong,
sau do inject vao create_app() / cac component can dung.
Khong co component nao doc lai environment trong luc xu ly request.

Su dung:
    settings = AppSettings.from_env()
    app = create_app(settings)
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

from config.paths import (
    BASE_DIR_ENV_VAR,
    HOST_ENV_VAR,
    LOG_DIR_ENV_VAR,
    LOG_LEVEL_ENV_VAR,
    PORT_ENV_VAR,
    TIMEOUT_ENV_VAR,
)

# === Default values cho settings ===
DEFAULT_TIMEOUT_SECS = 60.0
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
VALID_LOG_LEVELS = ("error", "warn", "warning", "info", "debug")

# Patterns hien thi san tren UI (user co the xoa/them)
DEFAULT_IGNORE_PATTERNS = (
    ".git",
    "node_modules",
    "target",
    "pnpm-lock.yaml",
    "yarn.lock",
    "package-lock.json",
    ".env",
)


@dataclass(frozen=True)
class AppSettings:
    """
    Typed settings cho repo-flattener.

    Immutable (frozen) vi duoc chia se giua cac request handlers.

    Attributes:
        base_dir: Thu muc goc, moi path tu request duoc join vao day
        log_level: Muc log (error, warn, info, debug)
        log_dir: Thu muc ghi log file (None = chi console)
        request_timeout: Thoi gian toi da (giay) cho mot lan scan
        host: Dia chi bind cua HTTP server
        port: Port cua HTTP server
        default_ignore_patterns: Patterns mac dinh hien thi tren UI
    """

    base_dir: Path = field(default_factory=lambda: Path("."))
    log_level: str = "info"
    log_dir: Optional[Path] = None
    request_timeout: float = DEFAULT_TIMEOUT_SECS
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    default_ignore_patterns: tuple[str, ...] = DEFAULT_IGNORE_PATTERNS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppSettings":
        """
        Tao AppSettings tu environment variables.

        Gia tri khong hop le (sai kieu, am, level la) se bi bo qua
        va dung default thay the, khong raise loi.

        Args:
            environ: Mapping env (mac dinh os.environ, truyen vao de test)

        Returns:
            AppSettings instance
        """
        env = os.environ if environ is None else environ

        base_dir = Path(env.get(BASE_DIR_ENV_VAR, "") or ".")

        log_level = env.get(LOG_LEVEL_ENV_VAR, "info").strip().lower()
        if log_level not in VALID_LOG_LEVELS:
            log_level = "info"

        log_dir_raw = env.get(LOG_DIR_ENV_VAR, "").strip()
        log_dir = Path(log_dir_raw).expanduser() if log_dir_raw else None

        return cls(
            base_dir=base_dir,
            log_level=log_level,
            log_dir=log_dir,
            request_timeout=_parse_positive_float(
                env.get(TIMEOUT_ENV_VAR), DEFAULT_TIMEOUT_SECS
            ),
            host=env.get(HOST_ENV_VAR, "").strip() or DEFAULT_HOST,
            port=_parse_port(env.get(PORT_ENV_VAR), DEFAULT_PORT),
        )

    def with_overrides(self, **changes) -> "AppSettings":
        """Tra ve ban sao voi cac field duoc override (bo qua gia tri None)."""
        filtered = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **filtered)


def _parse_positive_float(raw: Optional[str], default: float) -> float:
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _parse_port(raw: Optional[str], default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    # Port hop le: 1-65535
    return value if 0 < value < 65536 else default
