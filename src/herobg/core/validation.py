"""Caller-side validation for generation settings.

The prompt compiler and the adapters accept any well-formed settings value.
Whether a value is *usable* for its mode is decided here, before the core
is invoked: person mode needs at least one subject photo, mockup mode needs
a screenshot.
"""

import logging

from .errors import ValidationError
from .settings import MAX_PEOPLE, GenerationMode, GenerationSettings

logger = logging.getLogger(__name__)


def validate_settings(settings: GenerationSettings) -> None:
    """Check that the settings carry the inputs their mode requires.

    Args:
        settings: Settings about to be generated

    Raises:
        ValidationError: If validation fails, with a user-friendly message
    """
    if settings.mode == GenerationMode.PERSON:
        if not settings.person_images:
            raise ValidationError("Upload at least one subject photo first")
        if len(settings.person_images) > MAX_PEOPLE:
            raise ValidationError(f"At most {MAX_PEOPLE} subject photos are supported")
    elif settings.mode == GenerationMode.MOCKUP and settings.mockup_image is None:
        raise ValidationError("Upload a screenshot first")


def can_generate(settings: GenerationSettings) -> bool:
    """Return True if :func:`validate_settings` would accept the settings."""
    try:
        validate_settings(settings)
    except ValidationError as e:
        logger.debug(f"Settings not ready: {e}")
        return False
    return True
