"""
MAC Primitives

The keyed pseudorandom function HKDF is built on. The derivation core
only ever sees a MacFactory: something that hands out freshly keyed MAC
instances and reports their fixed output length.

HMAC itself comes from the `cryptography` package; this module never
implements hashing.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from cryptography.hazmat.primitives import hashes, hmac

from .config import Settings, get_settings

logger = logging.getLogger(__name__)


class MacFactory(ABC):
    """
    Capability set used by extract and expand.

    Implementations must be safe to share between threads: every call to
    create_mac() returns a new instance that no other caller observes.
    The returned object needs update(data), finalize() and copy().
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable algorithm name, e.g. "HMAC-SHA256"."""

    @property
    @abstractmethod
    def output_length(self) -> int:
        """Length in bytes of every finalized MAC value."""

    @abstractmethod
    def create_mac(self, key: bytes):
        """Return a new MAC instance keyed with `key`."""

    def evaluate(self, key: bytes, message: bytes) -> bytes:
        """One-shot MAC over `message` with a freshly keyed instance."""
        mac = self.create_mac(key)
        mac.update(message)
        return mac.finalize()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class HmacFactory(MacFactory):
    """
    HMAC over any `cryptography` hash algorithm.

    Example:
        HmacFactory(hashes.SHA384())
    """

    def __init__(self, algorithm: hashes.HashAlgorithm):
        if not isinstance(algorithm, hashes.HashAlgorithm):
            raise TypeError("algorithm must be a cryptography HashAlgorithm instance")
        if algorithm.digest_size is None or algorithm.digest_size <= 0:
            raise ValueError(f"Hash {algorithm.name} has no fixed digest size")
        self._algorithm = algorithm

    @property
    def algorithm(self) -> hashes.HashAlgorithm:
        return self._algorithm

    @property
    def name(self) -> str:
        return f"HMAC-{self._algorithm.name.upper()}"

    @property
    def output_length(self) -> int:
        return self._algorithm.digest_size

    def create_mac(self, key: bytes) -> hmac.HMAC:
        return hmac.HMAC(key, self._algorithm)


HMAC_SHA256 = HmacFactory(hashes.SHA256())
HMAC_SHA512 = HmacFactory(hashes.SHA512())
# Legacy, kept for interop and the RFC 5869 SHA-1 vectors.
HMAC_SHA1 = HmacFactory(hashes.SHA1())

_NAMED_FACTORIES: Dict[str, MacFactory] = {
    "sha256": HMAC_SHA256,
    "sha512": HMAC_SHA512,
    "sha1": HMAC_SHA1,
}


def get_mac_factory(name: str) -> MacFactory:
    """Look up one of the built-in HMAC factories by hash name."""
    try:
        return _NAMED_FACTORIES[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown MAC algorithm {name!r}, expected one of {sorted(_NAMED_FACTORIES)}"
        ) from None


def get_default_mac(settings: Optional[Settings] = None) -> MacFactory:
    """Factory selected by `default_algorithm` in the settings."""
    settings = settings or get_settings()
    factory = get_mac_factory(settings.default_algorithm)
    if factory is HMAC_SHA1:
        logger.warning("HMAC-SHA1 selected as default HKDF MAC; prefer sha256 or sha512")
    return factory
