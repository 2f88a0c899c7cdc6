"""
StreamService - Chay scan pipeline tren worker thread va relay ket qua.

Luong du lieu (single producer, single consumer):
    worker thread --(QueueProgressReporter)--> asyncio.Queue --> stream_scan()

stream_scan() la async generator, yield tung message dict:
- {"progress": <0-100>}  : moi progress event
- {"done": True, "content": ..., "token_count": ..., "warnings": [...]}
- {"error": "..."}

Luon ket thuc bang DUNG MOT terminal message (done hoac error).
Timeout hoac consumer dong generator se cancel CancellationToken,
worker dung lai o checkpoint tiep theo.
"""

import asyncio
import functools
from concurrent.futures import Executor
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Optional, Sequence, Union

from core.cancellation import CancellationToken, ScanCancelledError
from core.logging_config import log_error, log_info, log_warning
from core.progress import ScanProgress
from services.scan_service import ScanRootError, run_scan

TIMEOUT_MESSAGE = "Analysis timed out"
TASK_FAILED_MESSAGE = "Analysis task failed"

# Sentinel danh dau worker da ket thuc (thanh cong hay loi)
_WORKER_DONE = object()


class QueueProgressReporter:
    """
    ProgressReporter chuyen event tu worker thread sang asyncio.Queue.

    notify() khong block: chi schedule put_nowait tren event loop.
    Neu loop da dong, event bi bo qua.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop, queue: "asyncio.Queue[Any]"):
        self._loop = loop
        self._queue = queue

    def notify(self, event: ScanProgress) -> None:
        try:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, event)
        except RuntimeError:
            # Event loop da dong - consumer khong con
            pass


def progress_message(event: ScanProgress) -> Dict[str, Any]:
    return {"progress": round(event.percent, 2)}


async def stream_scan(
    root: Union[str, Path],
    ignore_patterns: Sequence[str],
    timeout: Optional[float] = None,
    executor: Optional[Executor] = None,
) -> AsyncIterator[Dict[str, Any]]:
    """
    Chay scan tren worker va yield cac message theo thu tu.

    Args:
        root: Thu muc goc da resolve
        ignore_patterns: Glob patterns de loai tru
        timeout: Thoi gian toi da (giay) cho ca lan scan, None = khong gioi han
        executor: Executor cho worker (None = default thread pool cua loop)

    Yields:
        Message dicts (progress..., roi mot terminal message)
    """
    loop = asyncio.get_running_loop()
    queue: "asyncio.Queue[Any]" = asyncio.Queue()
    cancel_token = CancellationToken()
    reporter = QueueProgressReporter(loop, queue)

    worker = loop.run_in_executor(
        executor,
        functools.partial(
            run_scan,
            root,
            list(ignore_patterns),
            reporter=reporter,
            cancel_token=cancel_token,
        ),
    )
    # Callback chay tren loop SAU cac put_nowait da schedule tu worker,
    # nen sentinel luon nam sau progress event cuoi cung
    worker.add_done_callback(lambda _fut: queue.put_nowait(_WORKER_DONE))

    deadline = None if timeout is None else loop.time() + timeout
    terminal: Optional[Dict[str, Any]] = None

    try:
        while True:
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                raise asyncio.TimeoutError()

            item = await asyncio.wait_for(queue.get(), remaining)
            if item is _WORKER_DONE:
                break
            yield progress_message(item)

        terminal = _terminal_message(worker)

    except asyncio.TimeoutError:
        cancel_token.cancel("timeout")
        log_error(f"[StreamService] Analysis of {root} timed out after {timeout}s")
        terminal = {"error": TIMEOUT_MESSAGE}

    finally:
        if not worker.done():
            # Timeout hoac consumer da dong stream
            cancel_token.cancel(cancel_token.reason or "stream closed")
            worker.add_done_callback(_discard_result)

    yield terminal


def _discard_result(worker: "asyncio.Future[Any]") -> None:
    """Lay exception cua worker bi bo lai de asyncio khong log 'never retrieved'."""
    if not worker.cancelled() and worker.exception() is not None:
        log_info(f"[StreamService] Abandoned worker stopped: {worker.exception()}")


def _terminal_message(worker: "asyncio.Future[Any]") -> Dict[str, Any]:
    """Chuyen ket qua cua worker thanh terminal message."""
    try:
        result = worker.result()
    except ScanRootError as e:
        log_warning(f"[StreamService] {e}")
        return {"error": str(e)}
    except ScanCancelledError as e:
        log_warning(f"[StreamService] Scan cancelled: {e}")
        return {"error": f"Analysis cancelled: {e}"}
    except Exception as e:
        log_error(f"[StreamService] {TASK_FAILED_MESSAGE}", e)
        return {"error": f"{TASK_FAILED_MESSAGE}: {e}"}

    log_info(f"[StreamService] Streamed {result.file_count} file(s)")
    return {"done": True, **result.to_dict()}
