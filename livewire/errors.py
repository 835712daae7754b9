"""Exception taxonomy for the Live-Wire core.

Every error raised across the public API derives from ``LiveWireError`` and
from the closest built-in exception, so callers may catch either.
"""

from __future__ import annotations


class LiveWireError(Exception):
    """Base class for all Live-Wire errors."""


class InvalidImageError(LiveWireError, ValueError):
    """Image is missing, zero-sized, malformed or smaller than 3x3."""


class ConfigurationError(LiveWireError, ValueError):
    """Cost weights or engine settings are inconsistent."""


class SeedNotSetError(LiveWireError, RuntimeError):
    """A path was requested before any seed point was set."""


class OutOfBoundsError(LiveWireError, IndexError):
    """Pixel coordinates lie outside [0, width) x [0, height)."""


class NoPathError(LiveWireError, LookupError):
    """The query pixel was never reached by the search."""


class InvariantViolationError(LiveWireError, AssertionError):
    """The pointer map is corrupt (cycle or missing predecessor).

    This signals a defect in the search, never a user error.
    """


class FeatureExtractionError(LiveWireError, RuntimeError):
    """A feature stage failed while building the cost fields."""


class SearchCancelledError(LiveWireError):
    """The shortest-path search was cancelled cooperatively."""
