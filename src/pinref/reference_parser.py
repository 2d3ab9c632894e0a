"""Whitespace-tokenized reference parser."""

from __future__ import annotations

import logging
from typing import List, Optional

from .digest import parse_digest
from .errors import Detail, InvalidReferenceError
from .identifier import IdentifierOptions
from .identifier_parser import IdentifierParser
from .reference import CHANNEL_PATTERN, DIGEST_PATTERN, Reference, from_identifier
from .version_constraint import parse_version_constraint

logger = logging.getLogger(__name__)

_VERSION_START = (">", "<", "=", "^", "~", "v", "V", "0", "1", "2", "3", "4", "5", "6", "7", "8", "9")


class ReferenceParser:
    """Split a reference into identifier, version or channel, and digest.

    The input is tokenized once. The first token that looks like a channel,
    a digest or a version ends the identifier; the tokens before it are
    handed to :class:`IdentifierParser`.
    """

    def __init__(self, s: str, options: IdentifierOptions):
        self._tokens: List[str] = s.split()
        self._pos = 0
        self._options = options

    def parse(self, context_type: str) -> Reference:
        """Parse the tokens into a Reference.

        Raises:
            InvalidReferenceError: on a missing identifier, missing version or
                channel, or trailing tokens.
            InvalidIdentifierError: if the identifier tokens are malformed.
            InvalidConstraintError: if the version constraint is malformed.
            InvalidDigestError: if the digest is malformed.
        """
        id_end = self._find_identifier_end()
        if id_end == 0:
            raise InvalidReferenceError(Detail.EMPTY_REFERENCE)

        identifier = IdentifierParser(self._tokens[:id_end], self._options).parse(context_type)
        self._pos = id_end

        channel, version = self._parse_version_or_channel()
        digest = self._parse_digest()

        if self._peek() is not None:
            raise InvalidReferenceError(Detail.UNEXPECTED_TOKEN, self._peek())

        return from_identifier(identifier, version=version, channel=channel, digest=digest)

    def _find_identifier_end(self) -> int:
        for i, token in enumerate(self._tokens):
            if CHANNEL_PATTERN.match(token) or DIGEST_PATTERN.match(token) or looks_like_version(token):
                return i
        return len(self._tokens)

    def _peek(self) -> Optional[str]:
        if self._pos >= len(self._tokens):
            return None
        return self._tokens[self._pos]

    def _parse_version_or_channel(self):
        token = self._peek()
        if token is None:
            raise InvalidReferenceError(Detail.MISSING_VERSION_CHANNEL)

        if CHANNEL_PATTERN.match(token):
            self._pos += 1
            return token[1:], None

        version_tokens = []
        while self._peek() is not None and not DIGEST_PATTERN.match(self._peek()):
            version_tokens.append(self._peek())
            self._pos += 1

        if not version_tokens:
            raise InvalidReferenceError(Detail.MISSING_VERSION_CHANNEL)

        return None, parse_version_constraint(" ".join(version_tokens))

    def _parse_digest(self):
        token = self._peek()
        if token is None or not DIGEST_PATTERN.match(token):
            return None
        self._pos += 1
        return parse_digest(token)


def looks_like_version(token: str) -> bool:
    """Return True if ``token`` starts like a version constraint."""
    return token.startswith(_VERSION_START)


def parse(s: str, context_type: str, options: IdentifierOptions) -> Reference:
    """Parse a reference string.

    Args:
        s: Reference text, e.g. ``official/my-widget >=1.0.0 <2.0.0``.
        context_type: Resource type expected by the caller. Used when ``s``
            has no type, and must equal the type when it does.
        options: Default registry and namespace.

    Returns:
        The parsed Reference.
    """
    reference = ReferenceParser(s, options).parse(context_type)
    logger.debug("Parsed reference %r as %s", s, reference)
    return reference


def must_parse(s: str, context_type: str, options: IdentifierOptions) -> Reference:
    """Like :func:`parse`, for literals known to be well-formed."""
    return parse(s, context_type, options)
