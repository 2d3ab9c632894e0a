"""Resource references: an identifier plus a version constraint or channel.

A reference has the general form::

    [<type>] [[scheme://]registry/]<path> (<version-constraint> | :<channel>) [<digest>]

for example ``official/my-widget ^1.2.0`` or
``registry.example.com/team/widget :beta sha256:4b825dc6``. A digest pins
exact content and makes the reference frozen.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .digest import Digest
from .errors import Detail, InvalidReferenceError
from .identifier import Identifier
from .version_constraint import VersionConstraint, parse_version_constraint

CHANNEL_PATTERN = re.compile(r"^:[a-z][a-z0-9-]*$")
DIGEST_PATTERN = re.compile(r"^[a-z0-9]+:[a-f0-9]+$")


@dataclass(frozen=True)
class Reference(Identifier):
    """A located, versioned and optionally frozen resource.

    Exactly one of ``version`` and ``channel`` is set. Build references with
    :func:`parse` or :func:`new`.
    """

    version: Optional[VersionConstraint] = None
    channel: Optional[str] = None
    digest: Optional[Digest] = None

    def __post_init__(self):
        if (self.version is None) == (self.channel is None):
            raise InvalidReferenceError(Detail.MISSING_VERSION_CHANNEL)

    def is_frozen(self) -> bool:
        """Whether a digest pins the exact content."""
        return self.digest is not None

    def is_channel_based(self) -> bool:
        return self.channel is not None

    def is_version_based(self) -> bool:
        return self.version is not None

    def __str__(self) -> str:
        """Canonical form: type, full URI, version or channel, then digest."""
        text = Identifier.__str__(self)
        if self.channel is not None:
            text += f" :{self.channel}"
        elif self.version is not None:
            text += f" {self.version}"
        if self.digest is not None:
            text += f" {self.digest}"
        return text


def new(
    identifier: Optional[Identifier],
    version_or_channel: str,
    digest: Optional[Digest] = None,
) -> Reference:
    """Build a reference from parts that are already parsed.

    Args:
        identifier: Resource location.
        version_or_channel: A channel such as ``:stable`` or a version
            constraint such as ``>=1.0.0 <2.0.0``.
        digest: Optional digest; when given the reference is frozen.

    Raises:
        InvalidReferenceError: if ``identifier`` is missing.
        InvalidConstraintError: if ``version_or_channel`` is neither a
            channel nor a valid constraint.
    """
    if identifier is None:
        raise InvalidReferenceError(Detail.EMPTY_REFERENCE)

    version = None
    channel = None
    if CHANNEL_PATTERN.match(version_or_channel):
        channel = version_or_channel[1:]
    else:
        version = parse_version_constraint(version_or_channel)

    return from_identifier(identifier, version=version, channel=channel, digest=digest)


def from_identifier(
    identifier: Identifier,
    version: Optional[VersionConstraint] = None,
    channel: Optional[str] = None,
    digest: Optional[Digest] = None,
) -> Reference:
    """Attach version information to an identifier."""
    return Reference(
        type=identifier.type,
        registry=identifier.registry,
        namespace=identifier.namespace,
        name=identifier.name,
        raw_path=identifier.raw_path,
        version=version,
        channel=channel,
        digest=digest,
    )
