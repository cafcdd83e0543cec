# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Stateless session handling.

The session record is the decrypted token payload; the codec turns it into
an opaque client-held token and back.
"""

from svue_gateway.domains.session.codec import (
    CipherDecodingError,
    CipherError,
    CipherLengthError,
    CryptoError,
    InvalidKeyError,
    NoKeyError,
    TokenAuthenticationError,
    TokenCodec,
    TokenPayloadError,
    clear_token_codec_cache,
    get_token_codec,
)
from svue_gateway.domains.session.record import SessionRecord

__all__ = [
    "SessionRecord",
    "TokenCodec",
    "get_token_codec",
    "clear_token_codec_cache",
    "CryptoError",
    "NoKeyError",
    "InvalidKeyError",
    "CipherError",
    "CipherLengthError",
    "CipherDecodingError",
    "TokenAuthenticationError",
    "TokenPayloadError",
]
