"""
L1 Domain — Content digest comparison.

Decides whether a repository file needs rewriting.  Comparison is by
digest, using the first algorithm from ``DIGEST_ALGORITHMS`` that this
interpreter's ``hashlib`` provides.
"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence

from nfinstall.core.services.repo_install.data.constants import DIGEST_ALGORITHMS
from nfinstall.core.services.repo_install.domain.capability import resolve_first_available


def resolve_digest_algorithm(
    algorithms: Sequence[str] = DIGEST_ALGORITHMS,
) -> str:
    """Return the first preferred algorithm hashlib can provide.

    Raises:
        MissingToolError: If none of ``algorithms`` is available.
    """
    return resolve_first_available(
        algorithms,
        "checksum algorithm",
        is_available=lambda name: name in hashlib.algorithms_available,
    )


def content_digest(data: bytes, algorithm: str | None = None) -> str:
    """Hex digest of ``data``."""
    algorithm = algorithm or resolve_digest_algorithm()
    return hashlib.new(algorithm, data).hexdigest()


def contents_match(
    existing: bytes,
    new: bytes,
    algorithms: Sequence[str] = DIGEST_ALGORITHMS,
) -> bool:
    """Whether two byte strings have the same digest."""
    algorithm = resolve_digest_algorithm(algorithms)
    return content_digest(existing, algorithm) == content_digest(new, algorithm)
