from __future__ import annotations
import logging
import random
import secrets

import gmpy2

from credbench import PrimitiveFailure, registry
from credbench.params import PRIMALITY_ROUNDS

logger = logging.getLogger(__name__)


def _random_prime(bits: int, randfunc: random.SystemRandom) -> gmpy2.mpz:
    """Next prime above a random `bits`-bit start (top bit forced)."""
    r = gmpy2.mpz(randfunc.getrandbits(bits))
    r = gmpy2.bit_set(r, bits - 1)
    return gmpy2.next_prime(r)


@registry.register("gmpy2")
class GMPBackend:
    """Safe primes by sampling a Sophie Germain prime q and testing 2q + 1."""
    name = "gmpy2"

    def __init__(self, rounds: int = PRIMALITY_ROUNDS) -> None:
        self.rounds = rounds
        self._randfunc = random.SystemRandom()

    def generate_safe_prime(self, bits: int) -> int:
        if bits < 3:
            raise PrimitiveFailure("generate_safe_prime", f"cannot build a {bits}-bit safe prime")
        attempts = 0
        try:
            while True:
                attempts += 1
                q = _random_prime(bits - 1, self._randfunc)
                p = 2 * q + 1
                if p.bit_length() == bits and gmpy2.is_prime(p, self.rounds):
                    logger.debug("found %d-bit safe prime after %d candidates", bits, attempts)
                    return int(p)
        except (ValueError, OverflowError, MemoryError) as exc:
            raise PrimitiveFailure("generate_safe_prime", repr(exc)) from exc

    def multiply(self, a: int, b: int) -> int:
        try:
            return int(gmpy2.mul(gmpy2.mpz(a), gmpy2.mpz(b)))
        except MemoryError as exc:
            raise PrimitiveFailure("multiply", "out of memory") from exc

    def sample_uniform(self, modulus: int) -> int:
        try:
            return secrets.randbelow(modulus)
        except (OSError, ValueError) as exc:
            raise PrimitiveFailure("sample_uniform", repr(exc)) from exc

    def gcd(self, a: int, b: int) -> int:
        return int(gmpy2.gcd(a, b))
