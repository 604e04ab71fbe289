"""
HKDF Exceptions
"""


class HKDFError(ValueError):
    """Base exception for key derivation failures."""
    pass


class InvalidInputError(HKDFError):
    """Input keying material or pseudorandom key is empty or missing."""
    pass


class InvalidLengthError(HKDFError):
    """Requested output length is non-positive or above 255 * hash length."""
    pass
