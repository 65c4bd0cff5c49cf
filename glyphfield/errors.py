"""
Exception types raised by GlyphField.

Sampling failures subclass ``ValueError`` so callers that already guard
image input with ``except ValueError`` keep working.
"""


class GlyphFieldError(Exception):
    """Base class for all GlyphField errors."""


class SamplingError(GlyphFieldError, ValueError):
    """An image could not be turned into particle targets."""


class EmptySourceError(SamplingError):
    """The pixel buffer has no pixel opaque enough to sample."""


class InvalidDimensionsError(SamplingError):
    """The pixel buffer has zero width/height or does not match its shape."""


class FieldNotInitializedError(GlyphFieldError, RuntimeError):
    """A particle field was retargeted before any particles existed."""
