"""Pick versions out of a caller-supplied candidate list.

Nothing here talks to a registry: callers fetch the candidate list and pass
it in.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import semantic_version

from .errors import InvalidVersionError
from .version import Version, parse_version
from .version_constraint import VersionConstraint

logger = logging.getLogger(__name__)


def matching_versions(
    constraint: VersionConstraint,
    candidates: Iterable[str],
    coerce: bool = False,
) -> List[Version]:
    """Return candidates accepted by ``constraint``, lowest first.

    Args:
        constraint: Constraint to apply.
        candidates: Version strings, e.g. from a registry listing.
        coerce: Normalize loose candidates (``1.2``, ``2``) with
            ``semantic_version`` before giving up on them.

    Returns:
        Matching versions in ascending order. Duplicates are kept once.
    """
    matched = {}
    for candidate in candidates:
        version = _parse_candidate(candidate, coerce)
        if version is None:
            continue
        if constraint.matches_version(version):
            matched.setdefault(version, version)

    # Prereleases never match, so every pair here is comparable.
    return sorted(matched.values())


def select_version(
    constraint: VersionConstraint,
    candidates: Iterable[str],
    coerce: bool = False,
) -> Optional[Version]:
    """Return the highest candidate accepted by ``constraint``, or None."""
    matched = matching_versions(constraint, candidates, coerce=coerce)
    if not matched:
        logger.debug("No candidate satisfies '%s'", constraint)
        return None
    return matched[-1]


def _parse_candidate(candidate: str, coerce: bool) -> Optional[Version]:
    try:
        return parse_version(candidate)
    except InvalidVersionError as exc:
        if not coerce:
            logger.debug("Skipping candidate %r: %s", candidate, exc)
            return None

    try:
        coerced = semantic_version.Version.coerce(candidate.strip().lstrip("vV"))
        return Version.from_semver(coerced)
    except ValueError as exc:
        logger.debug("Skipping candidate %r after coercion: %s", candidate, exc)
        return None
