"""Whitespace-tokenized identifier parser."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from .errors import Detail, InvalidIdentifierError, TypeMismatchError
from .identifier import Identifier, IdentifierOptions


class IdentifierParser:
    """Parser for ``[<type>] [[scheme://]host/]<path>`` token lists.

    Each instance owns its tokens and a cursor. The reference parser hands
    over the leading slice of its own tokens.
    """

    # Type: lowercase alphabetic only
    _TYPE_PATTERN = re.compile(r"^[a-z]+$")
    _SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*$")
    # DNS-like labels joined by dots, optional trailing dot and port
    _REGISTRY_PATTERN = re.compile(
        r"^[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?"
        r"(\.([a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?))+\.?(:[0-9]+)?$"
    )
    # Namespace and name segments on the default registry
    _NAME_PATTERN = re.compile(r"^[a-z]([a-z0-9-]{0,126}[a-z0-9])?$")
    _PATH_PATTERN = re.compile(r"^[a-z0-9/_.-]+$")

    def __init__(self, tokens: Sequence[str], options: IdentifierOptions):
        """Initialize the parser.

        Args:
            tokens: Whitespace-separated identifier tokens.
            options: Default registry and namespace.
        """
        self._tokens: List[str] = list(tokens)
        self._pos = 0
        self._options = options

    def parse(self, context_type: str) -> Identifier:
        """Parse all tokens into an Identifier.

        Raises:
            InvalidIdentifierError: if the tokens do not form an identifier.
            TypeMismatchError: if an explicit type differs from ``context_type``.
        """
        if not self._TYPE_PATTERN.match(context_type or ""):
            raise InvalidIdentifierError(Detail.INVALID_CONTEXT_TYPE, repr(context_type))
        if not self._tokens:
            raise InvalidIdentifierError(Detail.EMPTY_IDENTIFIER)

        type_ = self._parse_type(context_type)
        identifier = self._parse_location(type_)

        if self._peek() is not None:
            raise InvalidIdentifierError(Detail.UNEXPECTED_TOKEN, self._peek())
        return identifier

    def _peek(self) -> Optional[str]:
        if self._pos >= len(self._tokens):
            return None
        return self._tokens[self._pos]

    def _next(self) -> Optional[str]:
        token = self._peek()
        if token is not None:
            self._pos += 1
        return token

    def _parse_type(self, context_type: str) -> str:
        """Consume a leading type token if there is one.

        A lowercase word is a type only when followed by something that looks
        like a path or registry. A lone remaining token is always the path.
        """
        token = self._peek()
        if token is None or not self._TYPE_PATTERN.match(token):
            return context_type

        if self._pos + 1 >= len(self._tokens):
            return context_type
        following = self._tokens[self._pos + 1]
        if "/" not in following and not looks_like_registry(following):
            return context_type

        if token != context_type:
            raise TypeMismatchError(
                reason=f"type {token!r} does not match context {context_type!r}"
            )
        self._pos += 1
        return token

    def _parse_location(self, type_: str) -> Identifier:
        token = self._next()
        if token is None:
            raise InvalidIdentifierError(Detail.EMPTY_IDENTIFIER)

        if "://" in token:
            scheme, rest = token.split("://", 1)
            return self._parse_uri(type_, scheme, rest)

        if "/" in token:
            first, rest = token.split("/", 1)
            if looks_like_registry(first):
                return self._parse_registry_path(type_, first, rest)

        return self._parse_default_path(type_, token)

    def _parse_uri(self, type_: str, scheme: str, rest: str) -> Identifier:
        """Parse ``scheme://host/path``."""
        if not self._SCHEME_PATTERN.match(scheme):
            raise InvalidIdentifierError(Detail.INVALID_SCHEME, scheme)

        host, sep, path = rest.partition("/")
        if not sep or not host:
            raise InvalidIdentifierError(Detail.MISSING_REGISTRY, rest)
        if not path:
            raise InvalidIdentifierError(Detail.MISSING_PATH, rest)

        self._validate_host_and_path(host, path)
        return Identifier(type=type_, registry=f"{scheme}://{host}", raw_path=path)

    def _parse_registry_path(self, type_: str, host: str, path: str) -> Identifier:
        """Parse ``host/path``; the scheme defaults to https."""
        if not path:
            raise InvalidIdentifierError(Detail.EMPTY_PATH)

        self._validate_host_and_path(host, path)
        return Identifier(type=type_, registry=f"https://{host}", raw_path=path)

    def _validate_host_and_path(self, host: str, path: str) -> None:
        if not self._REGISTRY_PATTERN.match(host):
            raise InvalidIdentifierError(Detail.INVALID_REGISTRY, host)
        if not self._PATH_PATTERN.match(path):
            raise InvalidIdentifierError(Detail.INVALID_PATH, path)

    def _parse_default_path(self, type_: str, token: str) -> Identifier:
        """Parse ``namespace/name`` or ``name`` on the default registry."""
        registry = self._options.default_registry

        if "/" in token:
            namespace, name = token.split("/", 1)
            if not self._NAME_PATTERN.match(namespace):
                raise InvalidIdentifierError(Detail.INVALID_NAMESPACE, namespace)
            if not self._NAME_PATTERN.match(name):
                raise InvalidIdentifierError(Detail.INVALID_NAME, name)
            return Identifier(type=type_, registry=registry, namespace=namespace, name=name)

        if not self._NAME_PATTERN.match(token):
            raise InvalidIdentifierError(Detail.INVALID_NAME, token)
        return Identifier(
            type=type_,
            registry=registry,
            namespace=self._options.default_namespace,
            name=token,
        )


def looks_like_registry(s: str) -> bool:
    """Return True if ``s`` could be a registry host (has a dot or a port)."""
    return "." in s or ":" in s


def parse_identifier(s: str, context_type: str, options: IdentifierOptions) -> Identifier:
    """Parse ``[<type>] [[scheme://]host/]<path>``.

    The location takes one of three forms:

    - ``https://registry.example.com/path/to/resource``
    - ``registry.example.com/path/to/resource`` (scheme defaults to https)
    - ``namespace/name`` or ``name`` on the default registry; a bare name
      gets the default namespace.

    Args:
        s: Identifier text.
        context_type: Resource type expected by the caller. Used when ``s``
            has no type, and must equal the type when it does.
        options: Default registry and namespace.

    Returns:
        The parsed Identifier.

    Raises:
        InvalidIdentifierError: if the location is malformed.
        TypeMismatchError: if an explicit type differs from ``context_type``.
    """
    return IdentifierParser(s.split(), options).parse(context_type)


def must_parse_identifier(s: str, context_type: str, options: IdentifierOptions) -> Identifier:
    """Like :func:`parse_identifier`, for literals known to be well-formed."""
    return parse_identifier(s, context_type, options)
