"""Sensitive value decoding.

Passwords are stored encoded in configuration and only decoded when a
connection is opened. Supported encodings of the default decoder:

    pl:<text>     plain text
    b64:<base64>  base64 of the UTF-8 text
    <text>        no prefix, plain text

``obf:`` and ``pkc:`` values come from other tooling and are rejected.
"""

import base64
import binascii
import re
from abc import ABC, abstractmethod

_PREFIX = re.compile(r"^(pl|b64|obf|pkc):")


class SensitiveValueDecoder(ABC):
    """Decodes encoded configuration values."""

    @abstractmethod
    def decode(self, encoded: str) -> str:
        """Return the plain text for an encoded value."""
        pass


class PrefixedValueDecoder(SensitiveValueDecoder):
    """Decoder for ``pl:`` and ``b64:`` prefixed values."""

    def decode(self, encoded: str) -> str:
        """Decode a value.

        Args:
            encoded: Encoded value.

        Returns:
            Plain text value.

        Raises:
            ValueError: If the prefix is unknown or the payload is not valid
                for its encoding.
        """
        match = _PREFIX.match(encoded)
        if match is None:
            return encoded
        prefix, payload = match.group(1), encoded[match.end():]
        if prefix == "pl":
            return payload
        if prefix == "b64":
            try:
                return base64.b64decode(payload, validate=True).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as e:
                raise ValueError(f"Invalid b64 encoded value: {e}") from e
        raise ValueError(f"Unsupported sensitive value encoding: {prefix}")
