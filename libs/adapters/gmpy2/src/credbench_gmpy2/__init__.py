"""GMP-backed arithmetic (via `gmpy2`).

Importing the package registers the ``gmpy2`` backend.
"""

from . import backend as _backend  # noqa: F401

__all__: list[str] = []
