"""pinref: naming, versioning and pinning of registry resources.

Parse references such as ``official/my-widget >=1.0.0 <2.0.0 sha256:3a7b``
into immutable values, match versions against constraints, and intersect
constraints.
"""

from .constraint import Constraint, ConstraintGroup, Operator
from .digest import Digest, must_parse_digest, parse_digest
from .errors import (
    Category,
    Detail,
    IntersectionError,
    InvalidConstraintError,
    InvalidDigestError,
    InvalidIdentifierError,
    InvalidReferenceError,
    InvalidVersionError,
    PinrefError,
    TypeMismatchError,
)
from .identifier import (
    Identifier,
    IdentifierOptions,
    must_new_identifier,
    new_identifier,
    new_identifier_options,
)
from .identifier_parser import must_parse_identifier, parse_identifier
from .reference import Reference, new
from .reference_parser import must_parse, parse
from .resolve import matching_versions, select_version
from .version import Version, must_parse_version, parse_version
from .version_constraint import (
    VersionConstraint,
    must_parse_version_constraint,
    parse_version_constraint,
)

__version__ = "0.1.0"

__all__ = [
    "Category",
    "Constraint",
    "ConstraintGroup",
    "Detail",
    "Digest",
    "Identifier",
    "IdentifierOptions",
    "IntersectionError",
    "InvalidConstraintError",
    "InvalidDigestError",
    "InvalidIdentifierError",
    "InvalidReferenceError",
    "InvalidVersionError",
    "Operator",
    "PinrefError",
    "Reference",
    "TypeMismatchError",
    "Version",
    "VersionConstraint",
    "matching_versions",
    "must_new_identifier",
    "must_parse",
    "must_parse_digest",
    "must_parse_identifier",
    "must_parse_version",
    "must_parse_version_constraint",
    "new",
    "new_identifier",
    "new_identifier_options",
    "parse",
    "parse_digest",
    "parse_identifier",
    "parse_version",
    "parse_version_constraint",
    "select_version",
]
