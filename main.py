"""
repo-flattener - Main Application Entry Point

Web service dong goi mot thu muc thanh MOT document text
(tree listing + noi dung file co danh so dong) kem token count.

Chay:
    python main.py --port 3000 --base-dir /data
"""

import argparse
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

from config.app_settings import AppSettings
from config.paths import APP_NAME
from core.logging_config import log_info
from web.app import create_app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Flatten a directory tree into a single numbered text document.",
    )
    parser.add_argument("--host", type=str, default=None, help="Bind host (default: $HOST or 0.0.0.0).")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: $PORT or 3000).")
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=None,
        help="Directory that every requested path is resolved against (default: $DATA_DIR_BASE or '.').",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["error", "warn", "info", "debug"],
        help="Log level (default: $LOG_LEVEL or info).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request analysis timeout in seconds (default: $REQUEST_TIMEOUT_SECS or 60).",
    )
    return parser


def load_settings(argv: Optional[Sequence[str]] = None) -> AppSettings:
    """Doc environment MOT LAN roi ap dung override tu command line."""
    args = build_parser().parse_args(argv)
    return AppSettings.from_env().with_overrides(
        host=args.host,
        port=args.port,
        base_dir=args.base_dir,
        log_level=args.log_level,
        request_timeout=args.timeout,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = load_settings(argv)
    app = create_app(settings)

    log_info(f"Server started at http://{settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=_uvicorn_level(settings.log_level))
    return 0


def _uvicorn_level(level: str) -> str:
    return "warning" if level == "warn" else level


if __name__ == "__main__":
    raise SystemExit(main())
