"""Version constraint expressions.

Grammar::

    constraint  := group ( "||" group )*
    group       := term ( " " term )*
    term        := [op] version | wildcard | version " - " version
    op          := ">=" | "<=" | "!=" | ">" | "<" | "=" | "~" | "^"
    wildcard    := N ".x" | N "." M ".x"

Every group that opens towards newer versions (``>``, ``>=``) must also be
capped, so ``>=1.0.0`` alone is rejected while ``>=1.0.0 <2.0.0`` is fine.
Bare ``*`` is not accepted, and prereleases never appear in constraints.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .constraint import Constraint, ConstraintGroup, Operator
from .errors import Detail, IntersectionError, InvalidConstraintError
from .version import Version, parse_version

logger = logging.getLogger(__name__)

_VERSION_PATTERN = re.compile(r"^[vV]?([0-9]+)(?:\.([0-9]+))?(?:\.([0-9]+))?(?:-([a-zA-Z0-9.-]+))?$")
_OPERATOR_PATTERN = re.compile(r"^(>=|<=|!=|>|<|=|~|\^)?(.+)$")
_DIGITS_PATTERN = re.compile(r"^[0-9]+$")
_OPERATOR_CHARS = (">", "<", "=", "!", "~", "^")
_HYPHEN = "-"


@dataclass(frozen=True)
class VersionConstraint:
    """Constraint groups joined by OR.

    Build instances with :func:`parse_version_constraint` or
    :meth:`intersect`.
    """

    groups: Tuple[ConstraintGroup, ...]

    def __post_init__(self):
        if not self.groups:
            raise InvalidConstraintError(Detail.EMPTY_CONSTRAINT)

    def __str__(self) -> str:
        """Canonical form: groups joined by `` || ``, terms by a space.

        Shorthands are expanded (``1.0.0 - 2.0.0`` becomes
        ``>=1.0.0 <=2.0.0``). OR group order is kept as parsed.
        """
        return " || ".join(str(g) for g in self.groups)

    def matches(self, version: str) -> bool:
        """Parse ``version`` and check it against the constraint.

        Raises:
            InvalidVersionError: if ``version`` is not a valid version.
        """
        return self.matches_version(parse_version(version))

    def matches_version(self, version: Version) -> bool:
        """Whether any group accepts ``version``."""
        return any(group.matches(version) for group in self.groups)

    def intersect(self, other: Optional["VersionConstraint"]) -> "VersionConstraint":
        """Combine with ``other`` so that only versions accepted by both match.

        Each group of this constraint is ANDed with each group of ``other``.
        Combinations that break the upper-bound rule are dropped. The check is
        structural: a surviving group may still accept no real version (for
        example ``=1.0.0 =2.0.0``).

        Raises:
            IntersectionError: if ``other`` is None or no combination survives.
        """
        if other is None:
            raise IntersectionError(Detail.NIL_CONSTRAINT)

        combined: List[ConstraintGroup] = []
        for mine in self.groups:
            for theirs in other.groups:
                try:
                    group = ConstraintGroup(mine.constraints + theirs.constraints)
                except InvalidConstraintError as exc:
                    logger.debug("Dropping combined group '%s' + '%s': %s", mine, theirs, exc)
                    continue
                combined.append(group)

        if not combined:
            raise IntersectionError(Detail.NO_COMMON_VERSIONS, f"'{self}' and '{other}'")

        return VersionConstraint(tuple(combined))


def parse_version_constraint(s: str) -> VersionConstraint:
    """Parse a version constraint expression.

    Args:
        s: Expression such as ``^1.2``, ``>=1.0.0 <2.0.0 || 3.x`` or
            ``1.2.3 - 1.4.0``.

    Returns:
        The parsed VersionConstraint.

    Raises:
        InvalidConstraintError: with the detail naming the violated rule.
    """
    s = s.strip()
    if not s:
        raise InvalidConstraintError(Detail.EMPTY_CONSTRAINT)

    groups = []
    for segment in s.split("||"):
        segment = segment.strip()
        if not segment:
            raise InvalidConstraintError(Detail.EMPTY_OR_EXPRESSION)
        groups.append(_parse_group(segment))

    return VersionConstraint(tuple(groups))


def must_parse_version_constraint(s: str) -> VersionConstraint:
    """Like :func:`parse_version_constraint`, for literals known to be well-formed."""
    return parse_version_constraint(s)


def _parse_group(segment: str) -> ConstraintGroup:
    tokens = segment.split()
    if not tokens:
        raise InvalidConstraintError(Detail.EMPTY_CONSTRAINT_GROUP)
    return ConstraintGroup(tuple(_parse_tokens(tokens)))


def _parse_tokens(tokens: Sequence[str]) -> List[Constraint]:
    """Turn AND tokens into constraints, expanding ``A - B`` into ``>=A <=B``."""
    _validate_hyphen_positions(tokens)

    constraints = []
    i = 0
    while i < len(tokens):
        if i + 2 < len(tokens) and tokens[i + 1] == _HYPHEN:
            constraints.append(_parse_range_bound(Operator.GE, tokens[i]))
            constraints.append(_parse_range_bound(Operator.LE, tokens[i + 2]))
            i += 3
            continue
        constraints.append(_parse_term(tokens[i]))
        i += 1
    return constraints


def _validate_hyphen_positions(tokens: Sequence[str]) -> None:
    last = len(tokens) - 1
    for i, token in enumerate(tokens):
        if token != _HYPHEN:
            continue
        if i == 0:
            raise InvalidConstraintError(Detail.LEADING_HYPHEN)
        if i == last:
            raise InvalidConstraintError(Detail.TRAILING_HYPHEN)
        before, after = tokens[i - 1], tokens[i + 1]
        if before == _HYPHEN or after == _HYPHEN:
            raise InvalidConstraintError(Detail.CONSECUTIVE_HYPHENS)
        if _starts_with_operator(before) or _starts_with_operator(after):
            raise InvalidConstraintError(Detail.HYPHEN_WITH_OPERATOR)


def _starts_with_operator(token: str) -> bool:
    return token.startswith(_OPERATOR_CHARS)


def _has_wildcard(text: str) -> bool:
    return "x" in text or "X" in text


def _parse_range_bound(op: Operator, token: str) -> Constraint:
    if _starts_with_operator(token):
        raise InvalidConstraintError(Detail.RANGE_BOUND_WITH_OPERATOR, token)
    if _has_wildcard(token):
        raise InvalidConstraintError(Detail.RANGE_BOUND_WITH_WILDCARD, token)
    try:
        return _parse_operand(op, token)
    except InvalidConstraintError as exc:
        raise InvalidConstraintError(Detail.INVALID_RANGE_BOUND, str(exc)) from exc


def _parse_term(token: str) -> Constraint:
    if token == "*":
        raise InvalidConstraintError(Detail.BARE_WILDCARD)
    if token.endswith((".x", ".X")):
        return _parse_wildcard(token)

    match = _OPERATOR_PATTERN.match(token)
    if match is None:
        raise InvalidConstraintError(Detail.INVALID_CONSTRAINT_OPERATOR, token)
    op = Operator(match.group(1)) if match.group(1) else Operator.EQ
    operand = match.group(2)
    if _starts_with_operator(operand):
        # e.g. "=>1.0.0" or "~>1.2"
        raise InvalidConstraintError(Detail.INVALID_CONSTRAINT_OPERATOR, token)

    if _has_wildcard(operand):
        return _parse_wildcard(token)
    return _parse_operand(op, operand)


def _parse_operand(op: Operator, text: str) -> Constraint:
    match = _VERSION_PATTERN.match(text)
    if match is None:
        raise InvalidConstraintError(Detail.INVALID_VERSION_FORMAT, text)
    if match.group(4):
        raise InvalidConstraintError(Detail.PRERELEASE_IN_CONSTRAINT, text)

    major = int(match.group(1))
    minor = int(match.group(2)) if match.group(2) is not None else None
    patch = int(match.group(3)) if match.group(3) is not None else None
    return Constraint(op, major, minor, patch)


def _parse_wildcard(token: str) -> Constraint:
    """Parse ``1.x`` or ``1.2.x`` as an equality on the leading components.

    Only a bare or ``=`` prefix is allowed.
    """
    if token.startswith(_OPERATOR_CHARS):
        if token.startswith("=") and not token.startswith("=="):
            token = token[1:]
        else:
            raise InvalidConstraintError(Detail.WILDCARD_WITH_OPERATOR, token)

    if token in ("", "x", "X"):
        raise InvalidConstraintError(Detail.BARE_WILDCARD)

    wildcards = token.count(".x") + token.count(".X")
    if wildcards > 1 or (wildcards == 1 and token.count(".") > 2):
        raise InvalidConstraintError(Detail.MULTIPLE_WILDCARDS, token)

    base = token[:-2] if token.endswith((".x", ".X")) else token
    if "-" in base:
        raise InvalidConstraintError(Detail.PRERELEASE_IN_CONSTRAINT, token)
    parts = base.split(".")
    if len(parts) > 2:
        raise InvalidConstraintError(Detail.INVALID_VERSION_FORMAT, token)

    details = (Detail.INVALID_MAJOR_VERSION, Detail.INVALID_MINOR_VERSION)
    numbers = []
    for part, detail in zip(parts, details):
        if not _DIGITS_PATTERN.match(part):
            raise InvalidConstraintError(detail, token)
        numbers.append(int(part))

    minor = numbers[1] if len(numbers) > 1 else None
    return Constraint(Operator.EQ, numbers[0], minor)
