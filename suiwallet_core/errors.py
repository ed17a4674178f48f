"""
Exception hierarchy for suiwallet key derivation.

Every error raised by this package is a programmer / input error: there
is no I/O in the derivation pipeline, so nothing here is ever worth
retrying with the same input.
"""

from __future__ import annotations


class KeyDerivationError(Exception):
    """Base class for all suiwallet errors."""


class ArgumentError(KeyDerivationError, ValueError):
    """An argument is missing, of the wrong type, or out of range."""


class UnsupportedAlgorithmError(ArgumentError):
    """The requested keyed-hash digest is not one of the supported set."""


class FormatError(KeyDerivationError, ValueError):
    """A derivation path does not follow the hardened-only grammar."""
