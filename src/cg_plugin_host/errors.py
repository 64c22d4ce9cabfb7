"""Exception hierarchy for the plugin host library.

Verification never raises; it reports ``False`` instead.
"""
from __future__ import annotations


class HostLibError(Exception):
    """Base exception for all host library failures."""


class KeyImportError(HostLibError):
    """Raised when the supplied key pair cannot be imported under any supported algorithm."""


class SigningError(HostLibError):
    """Raised when a request cannot be signed."""


class GenerationError(HostLibError):
    """Raised when a fresh key pair cannot be generated."""


__all__ = ["HostLibError", "KeyImportError", "SigningError", "GenerationError"]
