"""
Particle animation session for GlyphField.

Ties content, sampler and particle field together: a content change is
rasterized, centered on the canvas, sampled, and handed to the field, which
creates its particles the first time and retargets them afterwards. Pointer
drag state is held here and read by every tick.
"""

import logging
from threading import Lock

import numpy as np

from . import config
from .core.content import PixelBuffer, depth_multiplier_for
from .core.rasterize import centered_offset
from .core.sampler import sample_targets
from .errors import SamplingError
from .physics.particle_system import ParticleField

logger = logging.getLogger(__name__)


class ParticleAnimation:
    """
    One particle field showing one piece of content at a time.

    Args:
        canvas_size (tuple): (W, H) of the output canvas
        count (int): particle count, fixed for the session
        first_frame (bool): use the looser first-appearance damping
        rng (np.random.Generator, optional): shared random source
        seed (int, optional): seed used when ``rng`` is not given
    """

    def __init__(self, canvas_size=config.DEFAULT_CANVAS_SIZE, count=config.DEFAULT_NUM_PARTICLES,
                 first_frame=False, rng=None, seed=None):
        self.canvas_size = tuple(canvas_size)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.field = ParticleField(count, rng=self.rng, first_frame=first_frame)
        self.content = None
        self.drag_position = None
        self.drag_velocity = None
        self._generation = 0
        self._lock = Lock()

    @property
    def first_frame(self):
        return self.field.first_frame

    def set_content(self, content) -> bool:
        """
        Show ``content``: sample it and move the particles to the new shape.

        ``content`` is a content descriptor or anything with a
        ``rasterize()`` method; a bare PixelBuffer is also accepted. When a
        newer call starts before this one finishes, this call's result is
        dropped.

        Returns:
            bool: True if the targets were applied

        Raises:
            SamplingError: the content has no sampleable pixels; the particles
                keep their previous shape
        """
        with self._lock:
            self._generation += 1
            generation = self._generation

        pixels = content if isinstance(content, PixelBuffer) else content.rasterize()
        offset = centered_offset(self.canvas_size, pixels.size)
        try:
            targets = sample_targets(pixels, offset, self.field.count, rng=self.rng,
                                     depth_multiplier=depth_multiplier_for(content))
        except SamplingError as e:
            logger.warning("Keeping previous shape, sampling failed: %s", e)
            raise

        with self._lock:
            if generation != self._generation:
                logger.debug("Dropping stale sample (generation %d < %d)", generation, self._generation)
                return False
            created = self.field.initialize(targets, self.canvas_size)
            self.content = content
        logger.info("%s particles for %r", "Created" if created else "Retargeted", content)
        return True

    def resize(self, canvas_size):
        """Change the canvas size and re-center the current content."""
        self.canvas_size = tuple(canvas_size)
        if self.content is not None:
            self.set_content(self.content)

    def begin_drag(self, position, velocity=None):
        """Pointer pressed or moved: set the drag point and its velocity."""
        self.drag_position = (float(position[0]), float(position[1]))
        self.drag_velocity = None if velocity is None else (float(velocity[0]), float(velocity[1]))

    def end_drag(self):
        """Pointer released: clear drag input and settle by one tick."""
        self.drag_position = None
        self.drag_velocity = None
        self.step()

    def step(self):
        """Advance one clock tick with the current drag input."""
        self.field.tick(self.drag_position, self.drag_velocity)
