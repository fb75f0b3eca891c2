from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional
import statistics

from .errors import StatisticsUndefined

"""Timing accumulators and the per-attribute-count result series.

Durations are whole milliseconds of process CPU time. Python ints do not
overflow, so sums are exact; mean and stddev are reported as floats.
"""


class StatsAccumulator:
    """Append-only sample series for one benchmark phase."""

    def __init__(self, phase: str) -> None:
        self.phase = phase
        self._samples: List[int] = []

    def record(self, duration_ms: int) -> None:
        if duration_ms < 0:
            raise ValueError(f"{self.phase}: negative duration {duration_ms} ms")
        self._samples.append(int(duration_ms))

    def reset(self) -> None:
        self._samples.clear()

    @property
    def samples(self) -> List[int]:
        return list(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def mean(self) -> Optional[float]:
        if not self._samples:
            return None
        return sum(self._samples) / len(self._samples)

    def std_deviation(self) -> Optional[float]:
        """Population standard deviation (divides by n, not n - 1)."""
        if not self._samples:
            return None
        return float(statistics.pstdev(self._samples))

    def snapshot(self) -> "MeanStd":
        mean = self.mean()
        stddev = self.std_deviation()
        if mean is None or stddev is None:
            raise StatisticsUndefined(f"no samples recorded for phase '{self.phase}'")
        return MeanStd(mean_ms=mean, stddev_ms=stddev, runs=len(self._samples))


@dataclass(frozen=True)
class MeanStd:
    mean_ms: float
    stddev_ms: float
    runs: int  # samples the pair was derived from


@dataclass
class PhaseSeries:
    """Mean/stddev rows for one phase, indexed by attribute count (1-based)."""
    phase: str
    label: str
    rows: List[MeanStd] = field(default_factory=list)

    def append(self, row: MeanStd) -> None:
        self.rows.append(row)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[MeanStd]:
        return iter(self.rows)

    def items(self) -> Iterator[tuple[int, MeanStd]]:
        for k, row in enumerate(self.rows, start=1):
            yield k, row
