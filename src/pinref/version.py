"""Semantic version parsing and comparison.

Versions always carry major, minor and patch. Prereleases are restricted to
``identifier.number`` (``alpha.1``, ``rc.3``); two prereleases compare only
when they share the same identifier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import Optional, Tuple

import semantic_version

from .errors import Detail, InvalidVersionError

# identifier.number, number without leading zeros
_PRERELEASE_PATTERN = re.compile(r"^([a-zA-Z][a-zA-Z0-9]*)\.([0-9]|[1-9][0-9]+)$")
_BUILD_PATTERN = re.compile(r"^[0-9A-Za-z-]+(\.[0-9A-Za-z-]+)*$")
_NUMBER_PATTERN = re.compile(r"^[+-]?[0-9]+$")


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A parsed semantic version. Build metadata never affects ordering."""

    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None
    build: Optional[str] = None

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text

    def is_prerelease(self) -> bool:
        """Return True if this version carries a prerelease tag."""
        return bool(self.prerelease)

    def compare(self, other: "Version") -> Tuple[int, bool]:
        """Compare two versions.

        Args:
            other: Version to compare against.

        Returns:
            Tuple of (ordering, valid). Ordering is -1, 0 or 1. Valid is
            False when both versions are prereleases with different
            identifiers (``alpha`` vs ``beta``), which have no defined order.
        """
        for mine, theirs in (
            (self.major, other.major),
            (self.minor, other.minor),
            (self.patch, other.patch),
        ):
            if mine != theirs:
                return _compare_int(mine, theirs), True
        return _compare_prerelease(self.prerelease, other.prerelease)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        ordering, valid = self.compare(other)
        return valid and ordering == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        ordering, valid = self.compare(other)
        if not valid:
            return NotImplemented
        return ordering < 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease or None))

    def to_semver(self) -> semantic_version.Version:
        """Convert to a ``semantic_version.Version``."""
        return semantic_version.Version(str(self))

    @classmethod
    def from_semver(cls, value: semantic_version.Version) -> "Version":
        """Build from a ``semantic_version.Version``, enforcing local prerelease rules."""
        return parse_version(str(value))


def parse_version(version: str) -> Version:
    """Parse a semantic version string.

    Accepts an optional ``v``/``V`` prefix. Major, minor and patch are all
    required; ``1.2`` is not a version (it is a valid constraint).

    Args:
        version: Text such as ``v1.2.3-rc.1+build.5``.

    Returns:
        The parsed Version.

    Raises:
        InvalidVersionError: with the detail naming the offending part.
    """
    s = version.strip()
    if s[:1] in ("v", "V"):
        s = s[1:]

    build = None
    if "+" in s:
        s, build = s.split("+", 1)
        if not build or not _BUILD_PATTERN.match(build):
            raise InvalidVersionError(Detail.INVALID_BUILD_METADATA)

    prerelease = None
    if "-" in s:
        s, prerelease = s.split("-", 1)
        if not _PRERELEASE_PATTERN.match(prerelease):
            raise InvalidVersionError(Detail.INVALID_PRERELEASE_FORMAT)

    parts = s.split(".")
    if len(parts) != 3:
        raise InvalidVersionError(Detail.INVALID_VERSION_COMPONENTS)

    major = _parse_component(parts[0], Detail.INVALID_MAJOR_VERSION)
    minor = _parse_component(parts[1], Detail.INVALID_MINOR_VERSION)
    patch = _parse_component(parts[2], Detail.INVALID_PATCH_VERSION)

    return Version(major, minor, patch, prerelease, build)


def must_parse_version(version: str) -> Version:
    """Like :func:`parse_version`, for literals known to be well-formed."""
    return parse_version(version)


def _parse_component(text: str, detail: Detail) -> int:
    if not _NUMBER_PATTERN.match(text):
        raise InvalidVersionError(detail)
    value = int(text)
    if value < 0:
        raise InvalidVersionError(detail)
    return value


def _compare_int(a: int, b: int) -> int:
    if a < b:
        return -1
    if a > b:
        return 1
    return 0


def _compare_prerelease(a: Optional[str], b: Optional[str]) -> Tuple[int, bool]:
    if not a and not b:
        return 0, True
    if not a:
        return 1, True  # stable > prerelease
    if not b:
        return -1, True

    a_id, a_num = _split_prerelease(a)
    b_id, b_num = _split_prerelease(b)
    if a_id != b_id:
        return 0, False
    return _compare_int(a_num, b_num), True


def _split_prerelease(prerelease: str) -> Tuple[str, int]:
    # Only called on values already validated by _PRERELEASE_PATTERN.
    identifier, _, number = prerelease.rpartition(".")
    return identifier, int(number)
