"""
GlyphField: text, icons and images drawn as a field of settling particles.

Pixels of a rasterized shape are sampled into particle targets, and a
spring-damper simulation pulls every particle toward its target, tick by
tick, with optional pointer drag forcing.
"""

from .animation import ParticleAnimation
from .core.content import DrawableContent, PixelBuffer, SymbolContent, TextContent
from .core.sampler import Targets, sample_targets
from .errors import EmptySourceError, FieldNotInitializedError, InvalidDimensionsError
from .physics.particle_system import Particle, ParticleField, drag_force

__version__ = "0.1.0"

__all__ = [
    'ParticleAnimation', 'ParticleField', 'Particle', 'Targets',
    'TextContent', 'SymbolContent', 'DrawableContent', 'PixelBuffer',
    'sample_targets', 'drag_force',
    'EmptySourceError', 'InvalidDimensionsError', 'FieldNotInitializedError',
]
