"""Content digests (``algorithm:hash``) that freeze a reference."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import Detail, InvalidDigestError


@dataclass(frozen=True)
class Digest:
    """Content-addressable digest.

    Only the format is checked here. Verifying the hash against actual
    content is the caller's job.
    """

    algorithm: str
    hash: str

    def __str__(self) -> str:
        return f"{self.algorithm}:{self.hash}"

    @staticmethod
    def equal(a: Optional["Digest"], b: Optional["Digest"]) -> bool:
        """Return True if both digests are identical or both are missing."""
        if a is None or b is None:
            return a is b
        return a.algorithm == b.algorithm and a.hash == b.hash


def parse_digest(s: str) -> Digest:
    """Parse ``algorithm:hash``. Both halves are lowercased.

    Raises:
        InvalidDigestError: if the colon is missing or either half is empty.
    """
    s = s.strip()
    if ":" not in s:
        raise InvalidDigestError(Detail.MISSING_DIGEST_COLON)

    algorithm, hash_value = s.split(":", 1)
    algorithm = algorithm.lower()
    hash_value = hash_value.lower()

    if not algorithm:
        raise InvalidDigestError(Detail.EMPTY_DIGEST_ALGORITHM)
    if not hash_value:
        raise InvalidDigestError(Detail.EMPTY_DIGEST_HASH)

    return Digest(algorithm=algorithm, hash=hash_value)


def must_parse_digest(s: str) -> Digest:
    """Like :func:`parse_digest`, for literals known to be well-formed."""
    return parse_digest(s)
