"""
Key Derivation Functions

HKDF (RFC 5869) extract-then-expand over a pluggable MAC.

    PRK = MAC(salt, IKM)
    T(0) = ""
    T(i) = MAC(PRK, T(i-1) | info | i)      for i = 1..N, N <= 255
    OKM = first L bytes of T(1) | T(2) | ... | T(N)

All functions are stateless; each call obtains its own MAC instances
from the factory it is given.
"""

import logging
from typing import List, Optional, Tuple

from .config import get_settings
from .exceptions import InvalidInputError, InvalidLengthError
from .mac import HMAC_SHA256, HMAC_SHA512, MacFactory, get_default_mac

logger = logging.getLogger(__name__)

MAX_BLOCKS = 255


def _as_bytes(value, name: str) -> bytes:
    if value is None:
        return b""
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes-like, got {type(value).__name__}")
    return bytes(value)


def extract(
    mac: MacFactory,
    input_key_material: bytes,
    salt: Optional[bytes] = None,
) -> bytes:
    """
    HKDF-Extract: concentrate the entropy of the input keying material
    into a fixed-length pseudorandom key.

    Args:
        mac: MAC factory (e.g. HMAC_SHA256)
        input_key_material: Secret source material (IKM), must not be empty
        salt: Optional non-secret random value; if missing or empty it is
            replaced by mac.output_length zero bytes

    Returns:
        Pseudorandom key (PRK) of exactly mac.output_length bytes

    Raises:
        InvalidInputError: If the input key material is empty
    """
    ikm = _as_bytes(input_key_material, "input_key_material")
    salt = _as_bytes(salt, "salt")

    if not salt:
        salt = b"\x00" * mac.output_length

    if not ikm:
        raise InvalidInputError("Input key material cannot be empty")

    prk = mac.evaluate(salt, ikm)

    logger.debug(
        "HKDF extract with %s: ikm=%d bytes, salt=%d bytes",
        mac.name, len(ikm), len(salt),
    )
    return prk


def expand(
    mac: MacFactory,
    pseudo_random_key: bytes,
    info: Optional[bytes],
    length: int,
) -> bytes:
    """
    HKDF-Expand: stretch a pseudorandom key into `length` bytes of
    output keying material bound to `info`.

    Args:
        mac: MAC factory (must match the one used for extract)
        pseudo_random_key: PRK, usually the output of extract(); only
            checked for being non-empty
        info: Optional context and application specific information
        length: Output length in bytes, 1..255 * mac.output_length

    Returns:
        Output keying material (OKM) of exactly `length` bytes

    Raises:
        InvalidLengthError: If length is not positive or too large
        InvalidInputError: If the pseudorandom key is empty
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f"length must be int, got {type(length).__name__}")

    if length <= 0:
        raise InvalidLengthError(f"Invalid key length: {length}, must be at least 1")

    prk = _as_bytes(pseudo_random_key, "pseudo_random_key")
    if not prk:
        raise InvalidInputError("Pseudorandom key cannot be empty")

    info = _as_bytes(info, "info")

    hash_len = mac.output_length
    iterations = (length + hash_len - 1) // hash_len
    if iterations > MAX_BLOCKS:
        raise InvalidLengthError(
            f"Invalid key length: {length}, maximum for {mac.name} is "
            f"{MAX_BLOCKS * hash_len}"
        )

    keyed = mac.create_mac(prk)
    okm = bytearray()
    block = b""

    for counter in range(1, iterations + 1):
        # copy() restarts from the keyed state, finalize() consumes the copy
        h = keyed.copy()
        h.update(block)
        h.update(info)
        h.update(bytes([counter]))
        block = h.finalize()
        okm += block

    logger.debug(
        "HKDF expand with %s: %d block(s) for %d bytes, info=%d bytes",
        mac.name, iterations, length, len(info),
    )
    return bytes(okm[:length])


def hkdf(
    mac: MacFactory,
    input_key_material: bytes,
    salt: Optional[bytes],
    info: Optional[bytes],
    length: int,
) -> bytes:
    """Extract then expand in a single call."""
    return expand(mac, extract(mac, input_key_material, salt), info, length)


def extract_hmac_sha256(input_key_material: bytes, salt: Optional[bytes] = None) -> bytes:
    return extract(HMAC_SHA256, input_key_material, salt)


def extract_hmac_sha512(input_key_material: bytes, salt: Optional[bytes] = None) -> bytes:
    return extract(HMAC_SHA512, input_key_material, salt)


def expand_hmac_sha256(pseudo_random_key: bytes, info: Optional[bytes], length: int) -> bytes:
    return expand(HMAC_SHA256, pseudo_random_key, info, length)


def expand_hmac_sha512(pseudo_random_key: bytes, info: Optional[bytes], length: int) -> bytes:
    return expand(HMAC_SHA512, pseudo_random_key, info, length)


def hkdf_sha256(
    input_key_material: bytes,
    salt: Optional[bytes],
    info: Optional[bytes],
    length: int,
) -> bytes:
    return hkdf(HMAC_SHA256, input_key_material, salt, info, length)


def hkdf_sha512(
    input_key_material: bytes,
    salt: Optional[bytes],
    info: Optional[bytes],
    length: int,
) -> bytes:
    return hkdf(HMAC_SHA512, input_key_material, salt, info, length)


def derive_key(
    input_key_material: bytes,
    context: bytes,
    length: Optional[int] = None,
    salt: bytes = b"",
    mac: Optional[MacFactory] = None,
) -> bytes:
    """
    Derive a single key with HKDF using the configured defaults.

    Args:
        input_key_material: The source key material
        context: Application-specific context string (info parameter)
        length: Desired output key length in bytes (default from settings)
        salt: Optional salt value
        mac: MAC factory (default from settings, HMAC-SHA256 unless overridden)

    Returns:
        Derived key of the requested length
    """
    mac = mac or get_default_mac()
    if length is None:
        length = get_settings().default_key_length

    return hkdf(mac, input_key_material, salt, context, length)


def derive_multiple_keys(
    input_key_material: bytes,
    contexts: List[Tuple[bytes, int]],
    salt: bytes = b"",
    mac: Optional[MacFactory] = None,
) -> List[bytes]:
    """
    Derive several independent keys from one input.

    Extracts once, then expands once per (context, length) pair. The
    result is identical to calling derive_key for each pair.

    Returns:
        List of derived keys in the same order as contexts
    """
    mac = mac or get_default_mac()
    prk = extract(mac, input_key_material, salt)

    return [
        expand(mac, prk, context, length)
        for context, length in contexts
    ]
