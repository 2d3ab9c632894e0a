"""Error types raised by the reference parsers.

Every failure carries a coarse category (which kind of value was being
parsed) and, where one applies, a fine-grained detail naming the exact rule
that was violated. Callers can catch a category subclass or compare
``err.detail`` against a :class:`Detail` member.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Category(Enum):
    """Broad error categories."""

    INVALID_IDENTIFIER = "invalid identifier"
    TYPE_MISMATCH = "resource type mismatch"
    INVALID_VERSION = "invalid version"
    INVALID_CONSTRAINT = "invalid version constraint"
    INVALID_DIGEST = "invalid digest"
    INVALID_REFERENCE = "invalid reference"
    INCOMPATIBLE = "incompatible constraints"


class Detail(Enum):
    """Specific causes, rendered after the category in error messages."""

    # Identifier
    INVALID_CONTEXT_TYPE = "invalid context type"
    EMPTY_IDENTIFIER = "empty identifier"
    INVALID_SCHEME = "invalid scheme"
    INVALID_REGISTRY = "invalid registry"
    INVALID_PATH = "invalid path"
    INVALID_NAMESPACE = "invalid namespace"
    INVALID_NAME = "invalid name"
    MISSING_REGISTRY = "missing registry in URI"
    MISSING_PATH = "missing path in URI"
    EMPTY_PATH = "empty path"
    MISSING_DEFAULT_REGISTRY = "default registry is required"
    MISSING_DEFAULT_NAMESPACE = "default namespace is required"
    UNEXPECTED_TOKEN = "unexpected token"

    # Reference
    EMPTY_REFERENCE = "empty reference"
    MISSING_VERSION_CHANNEL = "missing version or channel"

    # Version constraint
    EMPTY_CONSTRAINT = "empty constraint string"
    EMPTY_CONSTRAINT_GROUP = "empty constraint group"
    BARE_WILDCARD = "bare wildcard not allowed"
    MULTIPLE_WILDCARDS = "multiple wildcards not allowed"
    WILDCARD_WITH_OPERATOR = "wildcard cannot have operator"
    PRERELEASE_IN_CONSTRAINT = "prerelease not allowed in constraint"
    LEADING_HYPHEN = "leading hyphen in range"
    TRAILING_HYPHEN = "trailing hyphen in range"
    CONSECUTIVE_HYPHENS = "consecutive hyphens in range"
    HYPHEN_WITH_OPERATOR = "hyphen range with operator"
    RANGE_BOUND_WITH_OPERATOR = "range bound cannot have operator"
    RANGE_BOUND_WITH_WILDCARD = "range bound cannot have wildcard"
    MISSING_UPPER_BOUND = "constraint requires explicit upper bound"
    INVALID_VERSION_FORMAT = "invalid version format"
    INVALID_CONSTRAINT_OPERATOR = "invalid constraint operator"
    INVALID_RANGE_BOUND = "invalid range bound"
    EMPTY_OR_EXPRESSION = "empty version constraint in OR expression"
    NIL_CONSTRAINT = "cannot intersect nil constraints"
    NO_COMMON_VERSIONS = "constraints have no common versions"

    # Version
    INVALID_BUILD_METADATA = "invalid build metadata"
    INVALID_PRERELEASE_FORMAT = "invalid prerelease format"
    INVALID_VERSION_COMPONENTS = "version must have major.minor.patch"
    INVALID_MAJOR_VERSION = "invalid major version"
    INVALID_MINOR_VERSION = "invalid minor version"
    INVALID_PATCH_VERSION = "invalid patch version"

    # Digest
    MISSING_DIGEST_COLON = "digest missing colon separator"
    EMPTY_DIGEST_ALGORITHM = "empty digest algorithm"
    EMPTY_DIGEST_HASH = "empty digest hash"


class PinrefError(ValueError):
    """Base error for every parse, construction and intersection failure.

    Args:
        detail: The specific rule that was violated, if any.
        reason: Optional free-text context appended to the message.
    """

    category: Category = Category.INVALID_REFERENCE

    def __init__(self, detail: Optional[Detail] = None, reason: Optional[str] = None):
        self.detail = detail
        self.reason = reason
        parts = [self.category.value]
        if detail is not None:
            parts.append(detail.value)
        if reason:
            parts.append(reason)
        super().__init__(": ".join(parts))


class InvalidIdentifierError(PinrefError):
    """The location portion of a reference could not be parsed."""

    category = Category.INVALID_IDENTIFIER


class TypeMismatchError(InvalidIdentifierError):
    """An explicit resource type differs from the context type."""

    category = Category.TYPE_MISMATCH


class InvalidVersionError(PinrefError):
    """A version string is malformed."""

    category = Category.INVALID_VERSION


class InvalidConstraintError(PinrefError):
    """A version constraint expression violates the grammar or bound policy."""

    category = Category.INVALID_CONSTRAINT


class InvalidDigestError(PinrefError):
    """A digest string is malformed."""

    category = Category.INVALID_DIGEST


class InvalidReferenceError(PinrefError):
    """A reference is structurally invalid outside its identifier."""

    category = Category.INVALID_REFERENCE


class IntersectionError(PinrefError):
    """Two constraints cannot be intersected."""

    category = Category.INCOMPATIBLE
