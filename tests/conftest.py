from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]

for candidate in (
    ROOT / "libs" / "core" / "src",
    ROOT / "libs" / "adapters" / "openssl" / "src",
    ROOT / "libs" / "adapters" / "gmpy2" / "src",
    ROOT / "apps" / "cli" / "src",
):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

import credbench.cputime as cputime  # noqa: E402
from credbench import PrimitiveFailure, registry  # noqa: E402
from credbench_cli.runners import common as runners_common  # noqa: E402

# (p, q) safe primes small enough for instant tests.
SMALL_SAFE_PRIMES = (23, 47, 59, 83, 107, 167, 179, 227)


class FakeClock:
    """Stands in for process_time_ns; only moves when told to."""

    def __init__(self) -> None:
        self.now_ns = 0

    def advance(self, ms: int) -> None:
        self.now_ns += ms * 1_000_000

    def __call__(self) -> int:
        return self.now_ns


class FakeBackend:
    """Deterministic backend charging fixed CPU costs to an optional clock.

    Safe primes cost 10 ms each, the product 1 ms and every draw 2 ms.
    """
    name = "fake"

    def __init__(
        self,
        clock: Optional[FakeClock] = None,
        draws: Optional[Iterable[int]] = None,
        fail_on: Optional[str] = None,
    ) -> None:
        self.clock = clock
        self._primes: Iterator[int] = iter(SMALL_SAFE_PRIMES * 1000)
        self._draws: Optional[Iterator[int]] = iter(draws) if draws is not None else None
        self.fail_on = fail_on
        self.draw_count = 0

    def _charge(self, ms: int) -> None:
        if self.clock is not None:
            self.clock.advance(ms)

    def _maybe_fail(self, primitive: str) -> None:
        if self.fail_on == primitive:
            raise PrimitiveFailure(primitive, "injected failure")

    def generate_safe_prime(self, bits: int) -> int:
        self._charge(10)
        self._maybe_fail("generate_safe_prime")
        return next(self._primes)

    def multiply(self, a: int, b: int) -> int:
        self._charge(1)
        self._maybe_fail("multiply")
        return a * b

    def sample_uniform(self, modulus: int) -> int:
        self._charge(2)
        self._maybe_fail("sample_uniform")
        self.draw_count += 1
        if self._draws is not None:
            return next(self._draws) % modulus
        return 1

    def gcd(self, a: int, b: int) -> int:
        return math.gcd(a, b)


@pytest.fixture
def fake_clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    clock = FakeClock()
    monkeypatch.setattr(cputime.time, "process_time_ns", clock)
    return clock


@pytest.fixture
def fake_registry():
    runners_common._load_backends()
    original_items = dict(registry._items)  # type: ignore[attr-defined]
    registry._items["fake"] = FakeBackend  # type: ignore[attr-defined]
    runners_common.reset_backend_cache()
    try:
        yield registry
    finally:
        registry._items.clear()  # type: ignore[attr-defined]
        registry._items.update(original_items)  # type: ignore[attr-defined]
        runners_common.reset_backend_cache()


def is_safe_prime(p: int) -> bool:
    def _is_prime(n: int) -> bool:
        if n < 2:
            return False
        return all(n % d for d in range(2, math.isqrt(n) + 1))
    return _is_prime(p) and _is_prime((p - 1) // 2)


def rows_of(series) -> List[tuple[float, float]]:
    return [(row.mean_ms, row.stddev_ms) for row in series]
