"""Single version comparison rules and their AND-groups."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from .errors import Detail, InvalidConstraintError
from .version import Version


class Operator(Enum):
    """Constraint operators."""

    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    TILDE = "~"
    CARET = "^"

    @property
    def requires_upper_bound(self) -> bool:
        """Whether the operator leaves the range open towards newer versions."""
        return self in (Operator.GT, Operator.GE)

    @property
    def has_upper_bound(self) -> bool:
        """Whether the operator caps the range, explicitly or implicitly."""
        return self in (
            Operator.EQ,
            Operator.NE,
            Operator.LT,
            Operator.LE,
            Operator.TILDE,
            Operator.CARET,
        )


@dataclass(frozen=True)
class Constraint:
    """One operator applied to a possibly partial version.

    ``minor`` and ``patch`` are None when the constraint did not specify
    them, so ``=1.2`` matches every ``1.2.x``.
    """

    operator: Operator
    major: int
    minor: Optional[int] = None
    patch: Optional[int] = None

    def __post_init__(self):
        if self.patch is not None and self.minor is None:
            raise InvalidConstraintError(Detail.INVALID_VERSION_FORMAT, "patch requires minor")

    @property
    def minor_set(self) -> bool:
        return self.minor is not None

    @property
    def patch_set(self) -> bool:
        return self.patch is not None

    def matches(self, version: Version) -> bool:
        """Whether ``version`` satisfies this constraint.

        Prereleases never match; they can only be selected through a channel.
        """
        if version.is_prerelease():
            return False

        op = self.operator
        if op is Operator.EQ:
            return self.compare(version) == 0
        if op is Operator.NE:
            return self.compare(version) != 0
        if op is Operator.GT:
            return self.compare(version) < 0
        if op is Operator.GE:
            return self.compare(version) <= 0
        if op is Operator.LT:
            return self.compare(version) > 0
        if op is Operator.LE:
            return self.compare(version) >= 0
        if op is Operator.TILDE:
            return self._match_tilde(version)
        if op is Operator.CARET:
            return self._match_caret(version)
        return False

    def compare(self, version: Version) -> int:
        """Order the constraint's version against ``version``.

        Only components set on the constraint are compared.

        Returns:
            -1 if the constraint is lower, 0 if equal on set components,
            1 if higher.
        """
        pairs = [(self.major, version.major)]
        if self.minor_set:
            pairs.append((self.minor, version.minor))
        if self.patch_set:
            pairs.append((self.patch, version.patch))

        for mine, theirs in pairs:
            if mine != theirs:
                return -1 if mine < theirs else 1
        return 0

    def _match_tilde(self, v: Version) -> bool:
        # ~1 any 1.x.x, ~1.2 any 1.2.x, ~1.2.3 1.2.x with x >= 3
        if v.major != self.major:
            return False
        if not self.minor_set:
            return True
        if v.minor != self.minor:
            return False
        if not self.patch_set:
            return True
        return v.patch >= self.patch

    def _match_caret(self, v: Version) -> bool:
        if v.major != self.major:
            return False
        if self.major == 0:
            return self._match_caret_major_zero(v)
        return self._match_caret_major_nonzero(v)

    def _match_caret_major_zero(self, v: Version) -> bool:
        """0.x.y is unstable, so only patch changes are allowed.

        ``^0`` any 0.x.x, ``^0.0`` any 0.0.x, ``^0.0.3`` only 0.0.3,
        ``^0.2`` any 0.2.x, ``^0.2.3`` 0.2.x with x >= 3.
        """
        if not self.minor_set:
            return True
        if v.minor != self.minor:
            return False
        if not self.patch_set:
            return True
        if self.minor == 0:
            return v.patch == self.patch
        return v.patch >= self.patch

    def _match_caret_major_nonzero(self, v: Version) -> bool:
        # ^1.2.3 matches 1.x.y where x > 2, or x == 2 and y >= 3
        if not self.minor_set:
            return True
        if v.minor != self.minor:
            return v.minor > self.minor
        if not self.patch_set:
            return True
        return v.patch >= self.patch

    def __str__(self) -> str:
        text = f"{self.operator.value}{self.major}"
        if self.minor_set:
            text += f".{self.minor}"
        if self.patch_set:
            text += f".{self.patch}"
        return text


@dataclass(frozen=True)
class ConstraintGroup:
    """Constraints joined by AND.

    A group that contains ``>`` or ``>=`` must also contain an operator that
    caps the range. This is checked on construction.
    """

    constraints: Tuple[Constraint, ...]

    def __post_init__(self):
        if not self.constraints:
            raise InvalidConstraintError(Detail.EMPTY_CONSTRAINT_GROUP)
        needs_upper = any(c.operator.requires_upper_bound for c in self.constraints)
        has_upper = any(c.operator.has_upper_bound for c in self.constraints)
        if needs_upper and not has_upper:
            raise InvalidConstraintError(Detail.MISSING_UPPER_BOUND, str(self))

    @classmethod
    def of(cls, constraints: Iterable[Constraint]) -> "ConstraintGroup":
        return cls(tuple(constraints))

    def matches(self, version: Version) -> bool:
        """Whether ``version`` satisfies every constraint in the group."""
        return all(c.matches(version) for c in self.constraints)

    def __str__(self) -> str:
        return " ".join(str(c) for c in self.constraints)
