"""
Cancellation token cho scan pipeline - thread-safe.

Moi lan scan so huu mot CancellationToken rieng (khong dung global flag),
duoc truyen vao walker va renderer. Caller (timeout, client disconnect)
goi cancel(); worker thread dung lai o checkpoint tiep theo
(truoc moi lan enumerate directory va giua cac file).

Su dung threading.Event de dam bao thread-safe khi doc/ghi tu
event loop thread va worker thread.
"""

import threading
from typing import Optional


class ScanCancelledError(Exception):
    """Raised tai checkpoint khi scan da bi cancel."""


class CancellationToken:
    """Co cancel cho mot lan scan."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason: Optional[str] = None

    def cancel(self, reason: str = "cancelled") -> None:
        """
        Yeu cau dung scan. Goi nhieu lan van an toan, giu ly do dau tien.

        Args:
            reason: Ly do cancel (vd: "timeout", "client disconnected")
        """
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def raise_if_cancelled(self) -> None:
        """Checkpoint: raise ScanCancelledError neu da cancel."""
        if self._event.is_set():
            raise ScanCancelledError(self._reason or "cancelled")


def checkpoint(token: Optional[CancellationToken]) -> None:
    """Checkpoint cho code nhan token optional."""
    if token is not None:
        token.raise_if_cancelled()
