from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator
import logging
import time

from .errors import PrimitiveFailure

logger = logging.getLogger(__name__)


def _read_cpu_ns() -> int:
    try:
        return time.process_time_ns()
    except OSError as exc:
        raise PrimitiveFailure("read_cpu_time", str(exc)) from exc


@dataclass(frozen=True)
class CpuCheckpoint:
    """Process CPU-time reading taken at the start of a timing window.

    Checkpoints are plain values: whoever starts a window owns the checkpoint
    and passes it to wherever the window is closed.
    """
    started_ns: int

    @classmethod
    def now(cls) -> "CpuCheckpoint":
        return cls(_read_cpu_ns())

    def elapsed_ms(self) -> int:
        delta = _read_cpu_ns() - self.started_ns
        if delta < 0:
            raise PrimitiveFailure("read_cpu_time", "process CPU clock went backwards")
        return delta // 1_000_000


@contextmanager
def cpu_window(name: str, sink: Dict[str, int]) -> Iterator[CpuCheckpoint]:
    """Time the enclosed block; the elapsed ms lands in ``sink[name]``.

    The window is closed on exceptions as well, so partially completed
    iterations still report how long each finished stage took. A clock
    failure while another error is propagating leaves that error in charge.
    """
    checkpoint = CpuCheckpoint.now()
    try:
        yield checkpoint
    except BaseException:
        try:
            sink[name] = checkpoint.elapsed_ms()
        except PrimitiveFailure:
            logger.debug("could not close CPU window %r during error unwinding", name, exc_info=True)
        raise
    sink[name] = checkpoint.elapsed_ms()
