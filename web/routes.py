"""
REST API routes cho repo-flattener.

- POST /process        : scan dong bo, tra ve {content, token_count, warnings}
- POST /process_stream : NDJSON stream {progress}... roi {done,...} hoac {error}
- GET  /health         : trang thai server

Scan (filesystem I/O) luon chay tren worker thread, khong chay tren event loop.
Timeout chi dung viec cho cua request VA cancel worker o checkpoint tiep theo.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, AsyncIterator, Dict

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse

from config.app_settings import AppSettings
from config.paths import APP_VERSION
from core.cancellation import CancellationToken, ScanCancelledError
from core.logging_config import log_error, log_info, log_warning
from services.scan_service import ScanRootError, run_scan
from services.stream_service import TASK_FAILED_MESSAGE, TIMEOUT_MESSAGE, stream_scan
from web.path_guard import InvalidPathError, resolve_request_path
from web.schemas import PathRequest, PathResponse

NDJSON_MEDIA_TYPE = "application/x-ndjson"


def _settings(request: Request) -> AppSettings:
    return request.app.state.settings


def _resolve_or_400(settings: AppSettings, requested: str) -> Path:
    try:
        return resolve_request_path(settings.base_dir, requested)
    except InvalidPathError as e:
        log_warning(f"[API] Rejected path {requested!r}: {e}")
        raise HTTPException(status_code=400, detail=str(e))


def _ndjson(message: Dict[str, Any]) -> str:
    return json.dumps(message, ensure_ascii=False) + "\n"


def get_api_router() -> APIRouter:
    """Construct va tra ve API router (mount duoi prefix /api)."""
    router = APIRouter()

    @router.get("/health")
    def health(request: Request) -> Dict[str, Any]:
        settings = _settings(request)
        return {
            "ok": True,
            "version": APP_VERSION,
            "base_dir": str(settings.base_dir),
        }

    @router.post("/process", response_model=PathResponse)
    async def process_path(payload: PathRequest, request: Request) -> PathResponse:
        settings = _settings(request)
        root = _resolve_or_400(settings, payload.path)

        log_info(f"[API] Processing path: {root}")
        log_info(f"[API] Ignoring patterns: {payload.ignore_patterns}")

        cancel_token = CancellationToken()
        try:
            result = await asyncio.wait_for(
                asyncio.to_thread(
                    run_scan,
                    root,
                    payload.ignore_patterns,
                    cancel_token=cancel_token,
                ),
                timeout=settings.request_timeout,
            )
        except asyncio.TimeoutError:
            cancel_token.cancel("timeout")
            log_error(f"[API] Analysis of {root} timed out")
            raise HTTPException(status_code=500, detail=TIMEOUT_MESSAGE)
        except ScanRootError as e:
            raise HTTPException(
                status_code=400,
                detail=f"Failed to process path '{payload.path}': {e}",
            )
        except ScanCancelledError as e:
            log_warning(f"[API] Scan of {root} cancelled: {e}")
            raise HTTPException(status_code=500, detail=TIMEOUT_MESSAGE)
        except Exception as e:
            log_error(f"[API] {TASK_FAILED_MESSAGE}", e)
            raise HTTPException(status_code=500, detail=TASK_FAILED_MESSAGE)

        return PathResponse(**result.to_dict())

    @router.post("/process_stream")
    async def process_stream(payload: PathRequest, request: Request) -> StreamingResponse:
        settings = _settings(request)
        # Loi path tra ve 400 truoc khi bat dau stream
        root = _resolve_or_400(settings, payload.path)

        log_info(f"[API] Streaming path: {root}")

        async def body() -> AsyncIterator[str]:
            async for message in stream_scan(
                root,
                payload.ignore_patterns,
                timeout=settings.request_timeout,
            ):
                yield _ndjson(message)

        return StreamingResponse(body(), media_type=NDJSON_MEDIA_TYPE)

    return router
