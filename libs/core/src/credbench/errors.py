from __future__ import annotations
from typing import Dict, Optional

"""Error taxonomy for the CredDef benchmark.

Every error here is fatal at process scope: the CLI reports it and exits
without printing a report.
"""


class CredBenchError(Exception):
    """Base class for benchmark failures."""


class PrimitiveFailure(CredBenchError):
    """An arithmetic, randomness or CPU-clock primitive failed.

    `primitive` names the failing operation (e.g. ``generate_safe_prime``).
    `partial_timings` holds the CPU-time windows (ms) that had closed when the
    failure surfaced, so the diagnostic can show how far the iteration got.
    """

    def __init__(
        self,
        primitive: str,
        message: str = "",
        *,
        partial_timings: Optional[Dict[str, int]] = None,
        attribute_count: Optional[int] = None,
    ) -> None:
        self.primitive = primitive
        self.message = message
        self.partial_timings: Dict[str, int] = dict(partial_timings or {})
        self.attribute_count = attribute_count
        super().__init__(primitive, message)

    def __str__(self) -> str:
        text = f"primitive '{self.primitive}' failed"
        if self.message:
            text += f": {self.message}"
        if self.attribute_count is not None:
            text += f" (attribute count {self.attribute_count})"
        if self.partial_timings:
            parts = ", ".join(f"{k}={v} ms" for k, v in sorted(self.partial_timings.items()))
            text += f" [partial CPU time: {parts}]"
        return text


class StatisticsUndefined(CredBenchError):
    """Mean/stddev requested on an empty sample series (invariant violation)."""
