from __future__ import annotations

"""Fixed parameters for CredDef material generation.

Bit length and primality confidence are deliberately not user-configurable;
every benchmark run uses 1024-bit safe primes so results stay comparable.
"""

SAFE_PRIME_BITS = 1024
DEFAULT_BACKEND = "openssl"

# Miller-Rabin rounds used by backends that expose a rounds knob.
PRIMALITY_ROUNDS = 64

PHASE_ALL = "all"
PHASE_PRIMES = "primes"
PHASE_QRS = "qrs"
