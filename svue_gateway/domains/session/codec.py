# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Session token codec.

Encrypts a serialized SessionRecord into an opaque token and back, using
AES-128-GCM-SIV with a process-wide key read from the ``ENKEY``
environment variable (base64 of 16 random bytes).

Token layout (before the outer base64 applied for HTTP headers)::

    nonce (12 bytes) || ciphertext || tag (16 bytes)

A fresh random nonce is drawn for every encode call. The codec holds no
mutable state beyond the cipher built from the key, so one instance is
shared by all concurrent requests.

Example:
    >>> codec = get_token_codec()
    >>> token = codec.to_token(record)
    >>> codec.decode(base64.b64decode(token)) == record
    True
"""

import base64
import binascii
import logging
import os
from functools import lru_cache

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCMSIV
from pydantic import ValidationError

from svue_gateway.core.config import get_settings
from svue_gateway.core.config.settings import TokenSettings
from svue_gateway.domains.session.record import SessionRecord

logger = logging.getLogger(__name__)

NONCE_SIZE = 12
KEY_SIZE = 16


class CryptoError(Exception):
    """Base exception for session token operations.

    Attributes:
        message: Human-readable error description.
    """

    default_message = "Token error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NoKeyError(CryptoError):
    """Raised when the token key is not configured or is not base64."""

    default_message = "No key found :/"


class InvalidKeyError(CryptoError):
    """Raised when the configured token key has the wrong length."""

    default_message = "The crypto key was invalid"


class CipherError(CryptoError):
    """Raised when a token cannot be split or its plaintext is unusable."""


class CipherLengthError(CipherError):
    """Raised when a token is too short to contain a nonce."""

    default_message = "Invalid length"


class CipherDecodingError(CipherError):
    """Raised when the authenticated plaintext is not valid UTF-8."""

    default_message = "Invalid string"


class TokenAuthenticationError(CryptoError):
    """Raised when the authentication tag check fails.

    Covers tampered tokens and tokens minted under a different key.
    """

    default_message = "Token authentication failed"


class TokenPayloadError(CryptoError):
    """Raised when an authentic plaintext is not a session record."""

    default_message = "Invalid token payload"


class TokenCodec:
    """Authenticated encryption of session records.

    Attributes:
        _cipher: AES-GCM-SIV cipher bound to the process key.
    """

    def __init__(self, key: bytes) -> None:
        """Initialize the codec.

        Args:
            key: Raw 16-byte AES key.

        Raises:
            InvalidKeyError: If the key is not 16 bytes long.
        """
        if len(key) != KEY_SIZE:
            raise InvalidKeyError()
        self._cipher = AESGCMSIV(key)

    @classmethod
    def from_settings(cls, settings: TokenSettings) -> "TokenCodec":
        """Build a codec from token settings.

        Args:
            settings: Token settings holding the base64 key.

        Returns:
            Configured TokenCodec.

        Raises:
            NoKeyError: If no key is configured or it is not valid base64.
            InvalidKeyError: If the decoded key has the wrong length.
        """
        if settings.key is None:
            raise NoKeyError()

        try:
            key = base64.b64decode(settings.key.get_secret_value(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise NoKeyError() from e

        return cls(key)

    def encrypt(self, plaintext: str) -> bytes:
        """Encrypt text under a fresh random nonce.

        Args:
            plaintext: Text to protect.

        Returns:
            nonce || ciphertext || tag.
        """
        nonce = os.urandom(NONCE_SIZE)
        return nonce + self._cipher.encrypt(nonce, plaintext.encode("utf-8"), None)

    def decrypt(self, data: bytes) -> str:
        """Authenticate and decrypt a token.

        Args:
            data: nonce || ciphertext || tag.

        Returns:
            The plaintext.

        Raises:
            CipherLengthError: If data is not longer than a nonce.
            TokenAuthenticationError: If the tag check fails.
            CipherDecodingError: If the plaintext is not UTF-8.
        """
        if len(data) <= NONCE_SIZE:
            raise CipherLengthError()

        try:
            plaintext = self._cipher.decrypt(data[:NONCE_SIZE], data[NONCE_SIZE:], None)
        except InvalidTag as e:
            raise TokenAuthenticationError() from e

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CipherDecodingError() from e

    def encode(self, record: SessionRecord) -> bytes:
        """Encrypt a session record.

        Args:
            record: Record to serialize and encrypt.

        Returns:
            Opaque token bytes.
        """
        return self.encrypt(record.to_json())

    def decode(self, data: bytes) -> SessionRecord:
        """Decrypt a token back into a session record.

        Args:
            data: Opaque token bytes produced by encode().

        Returns:
            The SessionRecord that was encoded.

        Raises:
            CipherLengthError: If data is too short.
            TokenAuthenticationError: If the token was tampered with.
            CipherDecodingError: If the plaintext is not UTF-8.
            TokenPayloadError: If the plaintext is not a session record.
        """
        payload = self.decrypt(data)
        try:
            return SessionRecord.from_json(payload)
        except ValidationError as e:
            logger.debug("Authentic token with malformed payload: %d errors", e.error_count())
            raise TokenPayloadError() from e

    def to_token(self, record: SessionRecord) -> str:
        """Encode a record into the header-safe base64 token form."""
        return base64.b64encode(self.encode(record)).decode("ascii")


@lru_cache(maxsize=1)
def get_token_codec() -> TokenCodec:
    """Get the process-wide token codec.

    The key is read from settings on first use. Failures are not cached,
    so a missing key keeps raising NoKeyError until it is configured.

    Returns:
        Cached TokenCodec instance.

    Raises:
        NoKeyError: If the key is not configured.
        InvalidKeyError: If the key has the wrong length.
    """
    return TokenCodec.from_settings(get_settings().token)


def clear_token_codec_cache() -> None:
    """Forget the cached codec, e.g. after the key changed in tests."""
    get_token_codec.cache_clear()
