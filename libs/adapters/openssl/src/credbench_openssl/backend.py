from __future__ import annotations
import math
import secrets
import warnings

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives.asymmetric import dh
from cryptography.utils import CryptographyDeprecationWarning

from credbench import PrimitiveFailure, registry

# OpenSSL refuses DH parameter generation below this size.
MIN_SAFE_PRIME_BITS = 512


@registry.register("openssl")
class OpenSSLBackend:
    """Safe primes from OpenSSL's DH parameter generator.

    With generator 2, OpenSSL searches for p = 2q + 1 with q prime using its
    default (certain) primality checking, which is the same safe-prime search
    BN_generate_prime performs. Sampling draws from the OS CSPRNG.
    """
    name = "openssl"

    def generate_safe_prime(self, bits: int) -> int:
        if bits < MIN_SAFE_PRIME_BITS:
            raise PrimitiveFailure(
                "generate_safe_prime",
                f"OpenSSL requires at least {MIN_SAFE_PRIME_BITS} bits, got {bits}",
            )
        try:
            # FFDH parameter generation is deprecated upstream (cryptography 50).
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", CryptographyDeprecationWarning)
                params = dh.generate_parameters(generator=2, key_size=bits, backend=default_backend())
            return params.parameter_numbers().p
        except Exception as exc:
            raise PrimitiveFailure("generate_safe_prime", repr(exc)) from exc

    def multiply(self, a: int, b: int) -> int:
        try:
            return a * b
        except MemoryError as exc:
            raise PrimitiveFailure("multiply", "out of memory") from exc

    def sample_uniform(self, modulus: int) -> int:
        try:
            return secrets.randbelow(modulus)
        except (OSError, ValueError) as exc:
            raise PrimitiveFailure("sample_uniform", repr(exc)) from exc

    def gcd(self, a: int, b: int) -> int:
        return math.gcd(a, b)
