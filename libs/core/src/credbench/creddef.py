from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .cputime import cpu_window
from .errors import PrimitiveFailure
from .interfaces import BigNumBackend
from .params import PHASE_ALL, PHASE_PRIMES, PHASE_QRS, SAFE_PRIME_BITS
from .qr_sampler import QuadraticResidueSampler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PhaseTimings:
    """CPU time (ms) of one generation call, split by phase.

    ``total_ms`` also covers computing n and checkpoint overhead, so it is
    never smaller than ``primes_ms + qrs_ms``.
    """
    total_ms: int
    primes_ms: int
    qrs_ms: int

    def as_dict(self) -> Dict[str, int]:
        return {PHASE_ALL: self.total_ms, PHASE_PRIMES: self.primes_ms, PHASE_QRS: self.qrs_ms}


@dataclass(frozen=True)
class CredentialMaterial:
    p: int
    q: int
    n: int
    residues: Tuple[int, ...]


class CredentialMaterialGenerator:
    """Produces CredDef material (p, q, n = p*q, k residues) under CPU timing."""

    def __init__(
        self,
        backend: BigNumBackend,
        *,
        bits: int = SAFE_PRIME_BITS,
        sampler: Optional[QuadraticResidueSampler] = None,
    ) -> None:
        self.backend = backend
        self.bits = bits
        self.sampler = sampler if sampler is not None else QuadraticResidueSampler(backend)

    def generate(self, attribute_count: int) -> PhaseTimings:
        timings, _ = self._run(attribute_count)
        return timings

    def generate_material(self, attribute_count: int) -> Tuple[PhaseTimings, CredentialMaterial]:
        return self._run(attribute_count)

    def _run(self, attribute_count: int) -> Tuple[PhaseTimings, CredentialMaterial]:
        if attribute_count < 0:
            raise ValueError("attribute_count must be non-negative")
        elapsed: Dict[str, int] = {}
        try:
            with cpu_window(PHASE_ALL, elapsed):
                with cpu_window(PHASE_PRIMES, elapsed):
                    p = self.backend.generate_safe_prime(self.bits)
                    q = self.backend.generate_safe_prime(self.bits)
                n = self.backend.multiply(p, q)
                with cpu_window(PHASE_QRS, elapsed):
                    residues: List[int] = self.sampler.sample(n, attribute_count)
        except PrimitiveFailure as exc:
            exc.partial_timings.update(elapsed)
            if exc.attribute_count is None:
                exc.attribute_count = attribute_count
            raise
        timings = PhaseTimings(
            total_ms=elapsed[PHASE_ALL],
            primes_ms=elapsed[PHASE_PRIMES],
            qrs_ms=elapsed[PHASE_QRS],
        )
        logger.debug(
            "generated CredDef material: k=%d total=%dms primes=%dms qrs=%dms",
            attribute_count, timings.total_ms, timings.primes_ms, timings.qrs_ms,
        )
        return timings, CredentialMaterial(p=p, q=q, n=n, residues=tuple(residues))
