"""OpenSSL-backed arithmetic (via `cryptography`).

Importing the package registers the ``openssl`` backend.
"""

from . import backend as _backend  # noqa: F401

__all__: list[str] = []
