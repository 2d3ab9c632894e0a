"""Resource identifiers: where a resource lives, independent of version."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from .errors import Detail, InvalidIdentifierError


@dataclass(frozen=True)
class IdentifierOptions:
    """Defaults applied when an identifier omits its registry or namespace."""

    default_registry: str
    default_namespace: str

    def __post_init__(self):
        if not self.default_registry:
            raise InvalidIdentifierError(Detail.MISSING_DEFAULT_REGISTRY)
        try:
            urlsplit(self.default_registry)
        except ValueError as exc:
            raise InvalidIdentifierError(Detail.INVALID_REGISTRY, str(exc)) from exc
        if not self.default_namespace:
            raise InvalidIdentifierError(Detail.MISSING_DEFAULT_NAMESPACE)


def new_identifier_options(default_registry: str, default_namespace: str) -> IdentifierOptions:
    """Create options; both defaults are required."""
    return IdentifierOptions(default_registry=default_registry, default_namespace=default_namespace)


@dataclass(frozen=True)
class Identifier:
    """A parsed resource location.

    Resources on the default registry are addressed as ``namespace/name``;
    any other registry stores its path verbatim in ``raw_path``. Use
    :func:`parse_identifier` or :func:`new_identifier` to build one.
    """

    type: str
    registry: str
    namespace: str = ""
    name: str = ""
    raw_path: str = ""

    @property
    def host(self) -> str:
        """Registry authority, including the port when present."""
        return urlsplit(self.registry).netloc

    @property
    def hostname(self) -> str:
        """Registry host without the port."""
        return urlsplit(self.registry).hostname or ""

    @property
    def path(self) -> str:
        """``namespace/name`` on the default registry, the stored path elsewhere."""
        if self.raw_path:
            return self.raw_path
        if not self.namespace:
            return self.name
        return f"{self.namespace}/{self.name}"

    @property
    def uri(self) -> str:
        return f"{self.registry}/{self.path}"

    @property
    def identifier(self) -> "Identifier":
        """The bare identifier, without any version information."""
        return Identifier(self.type, self.registry, self.namespace, self.name, self.raw_path)

    def __str__(self) -> str:
        # Type, scheme and registry are always spelled out, even when defaulted.
        return f"{self.type} {self.uri}"


def new_identifier(
    type_: str,
    registry: str,
    namespace: str,
    name: str,
    path: Optional[str] = None,
) -> Identifier:
    """Build an identifier from already validated parts.

    Raises:
        InvalidIdentifierError: if ``registry`` is not a parseable URL.
    """
    try:
        urlsplit(registry)
    except ValueError as exc:
        raise InvalidIdentifierError(Detail.INVALID_REGISTRY, str(exc)) from exc
    return Identifier(type=type_, registry=registry, namespace=namespace, name=name, raw_path=path or "")


def must_new_identifier(type_: str, registry: str, namespace: str, name: str) -> Identifier:
    """Like :func:`new_identifier`, for literals known to be well-formed."""
    return new_identifier(type_, registry, namespace, name)
