from __future__ import annotations
from typing import Protocol

"""Big-integer backend interface used by the generator and sampler.

Backends implement this Protocol and register themselves into the global
registry. The core never talks to gmpy2/OpenSSL directly.
"""

class BigNumBackend(Protocol):
    """Arithmetic primitives needed for CredDef material.

    Implementations wrap library errors into ``PrimitiveFailure``.
    """
    name: str
    def generate_safe_prime(self, bits: int) -> int: ...
    def multiply(self, a: int, b: int) -> int: ...
    def sample_uniform(self, modulus: int) -> int: ...
    def gcd(self, a: int, b: int) -> int: ...
