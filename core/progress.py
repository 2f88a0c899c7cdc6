"""
Progress reporting cho scan pipeline.

- ScanProgress: event {processed, total}, total co dinh truoc khi doc file dau tien
- ProgressReporter: Protocol cho event sink (chi co notify())
- CallbackProgressReporter: adapter tu callable
- emit_progress(): gui event best-effort, loi cua sink khong lam hong renderer
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, runtime_checkable

from core.logging_config import log_debug


@dataclass(frozen=True)
class ScanProgress:
    """
    Progress cua phase render.

    Attributes:
        processed: So file da render (0..total, tang dan)
        total: Tong so file thu thap duoc trong lan traverse duy nhat
    """

    processed: int
    total: int

    @property
    def percent(self) -> float:
        """processed / total * 100; total == 0 duoc xem la da xong (100%)."""
        if self.total <= 0:
            return 100.0
        return self.processed / self.total * 100.0

    def to_dict(self) -> dict:
        return {"processed": self.processed, "total": self.total}


@runtime_checkable
class ProgressReporter(Protocol):
    """
    Event sink cho progress.

    notify() phai non-blocking tu goc nhin cua renderer. Sink da dong
    hoac khong kha dung duoc phep bo qua event.
    """

    def notify(self, event: ScanProgress) -> None:
        ...


class CallbackProgressReporter:
    """Wrap mot callable thanh ProgressReporter."""

    def __init__(self, callback: Callable[[ScanProgress], None]):
        self._callback = callback

    def notify(self, event: ScanProgress) -> None:
        self._callback(event)


def emit_progress(reporter: Optional[ProgressReporter], event: ScanProgress) -> None:
    """
    Gui event toi reporter (neu co).

    Best-effort: exception tu reporter bi nuot (chi log debug),
    scan tiep tuc binh thuong.
    """
    if reporter is None:
        return
    try:
        reporter.notify(event)
    except Exception as e:
        log_debug(f"[Progress] Dropped event {event.to_dict()}: {e}")
