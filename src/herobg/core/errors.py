"""Exception hierarchy for Hero BG Studio.

Every failure raised by the core derives from :class:`HeroBGError` and
carries a human-readable message that callers can show to the user as-is.

Hierarchy
---------
::

    HeroBGError
    ├── ConfigurationError   no credential could be resolved
    ├── ValidationError      settings unusable for the selected mode
    ├── EncodingError        an input image could not be read or decoded
    └── GenerationError
        ├── TransportError   the external API call failed
        └── EmptyResultError the API answered without an inline image

Configuration and encoding failures are always raised before any network
call is attempted.  Neither the adapters nor the studio retry.
"""

from __future__ import annotations


class HeroBGError(Exception):
    """Base class for all Hero BG Studio errors."""


class ConfigurationError(HeroBGError):
    """Raised when no API credential can be resolved."""


class ValidationError(HeroBGError):
    """User-friendly validation error.

    Raised by the caller-side checks in :mod:`herobg.core.validation` when
    the settings are missing the image input their mode requires.  The
    message is intended to be displayed directly to the user.
    """


class EncodingError(HeroBGError):
    """Raised when an input image cannot be turned into a request part."""


class GenerationError(HeroBGError):
    """Raised when a generation request does not produce an image."""


class TransportError(GenerationError):
    """Raised when the external generation API call itself fails.

    Wraps the underlying SDK or network exception; the original is kept as
    ``__cause__``.
    """


class EmptyResultError(GenerationError):
    """Raised when the API response contains no inline image part."""
