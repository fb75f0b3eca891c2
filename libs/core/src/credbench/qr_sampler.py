from __future__ import annotations
import logging
from typing import List, Optional

from .errors import PrimitiveFailure
from .interfaces import BigNumBackend

logger = logging.getLogger(__name__)


class QuadraticResidueSampler:
    """Rejection sampler for invertible residues mod n.

    Draws r uniformly from [0, n) and keeps it once gcd(r, n) == 1. This is
    the working notion of "QR" for CredDef benchmarking; actual quadratic
    residuosity is never checked.

    For n = p * q with large primes the rejection probability is about
    (p + q) / n, so the default unbounded loop terminates in practice. It is
    still a liveness risk for degenerate moduli; pass ``max_attempts`` to turn
    exhaustion into a ``PrimitiveFailure`` instead of spinning forever.
    """

    def __init__(self, backend: BigNumBackend, max_attempts: Optional[int] = None) -> None:
        if max_attempts is not None and max_attempts < 1:
            raise ValueError("max_attempts must be a positive integer or None")
        self.backend = backend
        self.max_attempts = max_attempts
        self.rejections = 0

    def sample_one(self, modulus: int) -> int:
        attempts = 0
        while True:
            if self.max_attempts is not None and attempts >= self.max_attempts:
                raise PrimitiveFailure(
                    "sample_uniform",
                    f"no residue coprime to the modulus after {attempts} draws",
                )
            attempts += 1
            r = self.backend.sample_uniform(modulus)
            if self.backend.gcd(r, modulus) == 1:
                return r
            self.rejections += 1
            logger.debug("rejected residue sharing a factor with n (attempt %d)", attempts)

    def sample(self, modulus: int, count: int) -> List[int]:
        if modulus < 2:
            raise ValueError("modulus must be at least 2")
        if count < 0:
            raise ValueError("count must be non-negative")
        return [self.sample_one(modulus) for _ in range(count)]
