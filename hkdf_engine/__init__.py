"""
HKDF Engine Package

HMAC-based extract-and-expand key derivation (RFC 5869) over a
pluggable MAC primitive.
"""

import logging

from .exceptions import HKDFError, InvalidInputError, InvalidLengthError
from .mac import (
    MacFactory,
    HmacFactory,
    HMAC_SHA1,
    HMAC_SHA256,
    HMAC_SHA512,
    get_mac_factory,
    get_default_mac,
)
from .key_derivation import (
    extract,
    expand,
    hkdf,
    extract_hmac_sha256,
    extract_hmac_sha512,
    expand_hmac_sha256,
    expand_hmac_sha512,
    hkdf_sha256,
    hkdf_sha512,
    derive_key,
    derive_multiple_keys,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    "extract",
    "expand",
    "hkdf",
    "extract_hmac_sha256",
    "extract_hmac_sha512",
    "expand_hmac_sha256",
    "expand_hmac_sha512",
    "hkdf_sha256",
    "hkdf_sha512",
    "derive_key",
    "derive_multiple_keys",
    "MacFactory",
    "HmacFactory",
    "HMAC_SHA1",
    "HMAC_SHA256",
    "HMAC_SHA512",
    "get_mac_factory",
    "get_default_mac",
    "HKDFError",
    "InvalidInputError",
    "InvalidLengthError",
]
