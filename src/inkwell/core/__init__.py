"""Core configuration and utilities for inkwell."""

from inkwell.core.config import (
    DEFAULT_DATABASE_URL,
    DEFAULT_SLUG_MAX_ATTEMPTS,
    BlogConfig,
    load_config,
)
from inkwell.core.errors import (
    BlogError,
    ConfigurationError,
    NotAuthorized,
    NotFound,
    Unauthenticated,
    ValidationError,
)
from inkwell.core.messages import friendly_message
from inkwell.core.progress import BatchProgress
from inkwell.core.slug import POST_FALLBACK, USER_FALLBACK, SlugGenerator, normalize

__all__ = [
    "DEFAULT_DATABASE_URL",
    "DEFAULT_SLUG_MAX_ATTEMPTS",
    "POST_FALLBACK",
    "USER_FALLBACK",
    "BatchProgress",
    "BlogConfig",
    "SlugGenerator",
    "friendly_message",
    "load_config",
    "normalize",
    "BlogError",
    "ConfigurationError",
    "NotAuthorized",
    "NotFound",
    "Unauthenticated",
    "ValidationError",
]
