from __future__ import annotations
"""Shared benchmarking utilities for CLI runners.

Includes backend bootstrap, the attribute-count x iteration sweep driver,
and plain-text report rendering.
"""

import importlib
import importlib.util
import logging
import platform
import sys

from dataclasses import dataclass
from typing import Callable, Dict, Any, Iterator, List, Optional, Tuple

import psutil

from credbench import (
    CredentialMaterialGenerator,
    PhaseSeries,
    StatsAccumulator,
    registry,
)
from credbench.params import PHASE_ALL, PHASE_PRIMES, PHASE_QRS

logger = logging.getLogger(__name__)

_BACKEND_MODULES = ("credbench_openssl", "credbench_gmpy2")
_BACKEND_INSTANCE_CACHE: Dict[str, Any] = {}

PHASE_LABELS = {
    PHASE_ALL: "whole CredDef generation",
    PHASE_PRIMES: "CredDef prime generation",
    PHASE_QRS: "CredDef QRns generation",
}


def _load_backends() -> None:
    for mod in _BACKEND_MODULES:
        if importlib.util.find_spec(mod) is None:
            logger.warning("[backend optional] %s not installed", mod)
            continue
        try:
            importlib.import_module(mod)
        except ImportError as exc:
            # gmpy2 without its GMP build, etc.: keep the other backends usable.
            logger.warning("[backend import error] %s: %s", mod, exc)


def get_backend(name: str):
    if name not in _BACKEND_INSTANCE_CACHE:
        _load_backends()
        _BACKEND_INSTANCE_CACHE[name] = registry.get(name)()
        logger.debug("using backend %s", name)
    return _BACKEND_INSTANCE_CACHE[name]


def reset_backend_cache(name: Optional[str] = None) -> None:
    if name is None:
        _BACKEND_INSTANCE_CACHE.clear()
    else:
        _BACKEND_INSTANCE_CACHE.pop(name, None)


@dataclass
class SweepResult:
    n_attrs: int
    n_iters: int
    all: PhaseSeries
    primes: PhaseSeries
    qrs: PhaseSeries
    backend: str = "unknown"
    reset_per_step: bool = False

    def phases(self) -> Iterator[PhaseSeries]:
        yield self.all
        yield self.primes
        yield self.qrs


class BenchmarkDriver:
    """Runs generate(k) n_iters times for every k in 1..n_attrs.

    The three accumulators are cumulative across the whole sweep unless
    ``reset_per_step`` is set, in which case each attribute count is
    summarised from its own iterations only.
    """

    def __init__(
        self,
        generator: CredentialMaterialGenerator,
        n_attrs: int,
        n_iters: int,
        *,
        reset_per_step: bool = False,
        progress_cb: Optional[Callable[[int, int], None]] = None,
    ) -> None:
        if n_attrs < 1 or n_iters < 1:
            raise ValueError("n_attrs and n_iters must be positive")
        self.generator = generator
        self.n_attrs = n_attrs
        self.n_iters = n_iters
        self.reset_per_step = reset_per_step
        self.progress_cb = progress_cb
        self.accumulators: Dict[str, StatsAccumulator] = {
            phase: StatsAccumulator(phase) for phase in PHASE_LABELS
        }

    def _notify(self, k: int, i: int) -> None:
        if self.progress_cb is None:
            return
        try:
            self.progress_cb(k, i)
        except Exception:
            # Never let progress reporting break measurements
            logger.debug("progress callback failed", exc_info=True)

    def run(self) -> SweepResult:
        series = {phase: PhaseSeries(phase, label) for phase, label in PHASE_LABELS.items()}
        for k in range(1, self.n_attrs + 1):
            if self.reset_per_step:
                for acc in self.accumulators.values():
                    acc.reset()
            for i in range(1, self.n_iters + 1):
                self._notify(k, i)
                timings = self.generator.generate(k)
                for phase, duration in timings.as_dict().items():
                    self.accumulators[phase].record(duration)
            for phase, acc in self.accumulators.items():
                series[phase].append(acc.snapshot())
            logger.debug(
                "attribute count %d done: %s", k,
                ", ".join(f"{p}={s.rows[-1].mean_ms:.3f}ms" for p, s in series.items()),
            )
        return SweepResult(
            n_attrs=self.n_attrs,
            n_iters=self.n_iters,
            all=series[PHASE_ALL],
            primes=series[PHASE_PRIMES],
            qrs=series[PHASE_QRS],
            backend=getattr(self.generator.backend, "name", "unknown"),
            reset_per_step=self.reset_per_step,
        )


def run_creddef(
    backend_name: str,
    n_attrs: int,
    n_iters: int,
    *,
    reset_per_step: bool = False,
    progress_cb: Optional[Callable[[int, int], None]] = None,
) -> SweepResult:
    generator = CredentialMaterialGenerator(get_backend(backend_name))
    driver = BenchmarkDriver(
        generator,
        n_attrs,
        n_iters,
        reset_per_step=reset_per_step,
        progress_cb=progress_cb,
    )
    return driver.run()


def render_table(series: PhaseSeries, n_iters: int) -> str:
    lines: List[str] = [
        f"#Benchmarks for {series.label}",
        f"#Data obtained iterating {n_iters} times",
        "#Num attrs\tMean time (ms)\tStd dev (ms)",
    ]
    for k, row in series.items():
        lines.append(f"{k}\t\t{row.mean_ms:.6f}\t{row.stddev_ms:.6f}")
    return "\n".join(lines)


def render_report(result: SweepResult) -> str:
    return "\n\n".join(render_table(series, result.n_iters) for series in result.phases())


def _detect_cpu_model() -> str | None:
    if platform.system() == "Linux":
        try:
            with open("/proc/cpuinfo", encoding="utf-8", errors="ignore") as fh:
                for line in fh:
                    if line.lower().startswith("model name"):
                        return line.split(":", 1)[1].strip()
        except OSError:
            pass
    return platform.processor() or platform.machine() or None


def _collect_environment_meta(backend_name: str) -> List[Tuple[str, Any]]:
    return [
        ("python", platform.python_version()),
        ("platform", platform.platform()),
        ("cpu", _detect_cpu_model() or "unknown"),
        ("cores_logical", psutil.cpu_count()),
        ("backend", backend_name),
        ("argv", " ".join(sys.argv)),
    ]


def render_environment(backend_name: str) -> str:
    return "\n".join(f"#{key}: {value}" for key, value in _collect_environment_meta(backend_name))
