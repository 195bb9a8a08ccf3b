"""URI validation helpers.

Python's ``urllib.parse`` accepts almost any string, so references are first
checked against the RFC 3986 character set before they are split. Absolute
URIs must additionally carry a scheme and a host.
"""

import logging
import re
import socket
from typing import Optional
from urllib.parse import SplitResult, urlsplit

logger = logging.getLogger(__name__)

# Non-ASCII characters are allowed unescaped unless they are controls or
# whitespace.
_URI_REFERENCE = re.compile(
    r"^(?:[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=]|[^\x00-\x9f\s]|%[0-9A-Fa-f]{2})*$"
)
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


class InvalidUri(ValueError):
    """String is not a syntactically valid URI."""

    def __init__(self, uri: str, reason: str) -> None:
        super().__init__(f"{reason}: {uri}")
        self.uri = uri
        self.reason = reason


def parse_uri_reference(uri: str) -> SplitResult:
    """Parse a relative or absolute URI reference.

    Args:
        uri: URI reference to parse.

    Returns:
        The split components.

    Raises:
        InvalidUri: If the reference contains illegal characters or
            malformed escapes.
    """
    if uri is None:
        raise InvalidUri(str(uri), "Null URI")
    if not _URI_REFERENCE.match(uri):
        bad = next(
            (c for c in uri if not _URI_REFERENCE.match(c) and c != "%"),
            None,
        )
        if bad is None:
            raise InvalidUri(uri, "Malformed escape sequence")
        raise InvalidUri(uri, f"Illegal character {bad!r}")
    if uri.count("#") > 1:
        raise InvalidUri(uri, "Illegal character '#' in fragment")
    try:
        parts = urlsplit(uri)
    except ValueError as e:
        raise InvalidUri(uri, str(e)) from e
    if parts.scheme and not _SCHEME.match(parts.scheme):
        raise InvalidUri(uri, "Illegal character in scheme name")
    return parts


def is_absolute(uri: str) -> bool:
    """Return whether a URI reference has a scheme."""
    return bool(parse_uri_reference(uri).scheme)


class ValidatedUri:
    """An absolute URI with a scheme and a host."""

    def __init__(self, uri: str) -> None:
        """Validate a URI.

        Args:
            uri: Absolute URI string.

        Raises:
            InvalidUri: If the URI is empty, relative, lacks a host or
                has a malformed port.
        """
        if not uri:
            raise InvalidUri(str(uri), "Null or empty URI")
        parts = parse_uri_reference(uri)
        if not parts.scheme:
            raise InvalidUri(uri, "Relative URI not allowed")
        if not parts.hostname:
            raise InvalidUri(uri, "No host in URI")
        try:
            parts.port
        except ValueError as e:
            raise InvalidUri(uri, "Invalid port") from e
        self._uri = uri
        self._parts = parts

    @property
    def scheme(self) -> str:
        return self._parts.scheme

    @property
    def raw_authority(self) -> str:
        """Authority exactly as written, including user info and port."""
        return self._parts.netloc

    @property
    def host(self) -> str:
        return self._parts.hostname

    @property
    def port(self) -> Optional[int]:
        return self._parts.port

    def log_unreachable_host(self) -> "ValidatedUri":
        """Warn when the host name cannot be resolved.

        The check never raises; an unresolvable host at startup may become
        reachable later.

        Returns:
            This URI, for chaining.
        """
        try:
            socket.getaddrinfo(self.host, self.port)
        except (OSError, UnicodeError) as e:
            logger.warning(f"Host {self.host} is unreachable: {e}")
        return self

    def __str__(self) -> str:
        return self._uri

    def __repr__(self) -> str:
        return f"ValidatedUri({self._uri!r})"
