"""
Image sampling module for GlyphField.

Turns an RGBA8 pixel buffer into particle targets. Each target is a
uniformly random opaque pixel of the buffer, placed in world space by the
placement offset, with a depth derived from pixel brightness and the pixel's
color.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .. import config
from ..errors import EmptySourceError, InvalidDimensionsError
from .content import as_pixel_buffer

logger = logging.getLogger(__name__)


@dataclass
class Targets:
    """
    Target samples as parallel arrays.

    Attributes:
        x, y (np.ndarray): world positions, shape (N,)
        z (np.ndarray): depth in [0, 1], shape (N,)
        color (np.ndarray): RGB in [0, 1], shape (N, 3)
    """

    x: np.ndarray
    y: np.ndarray
    z: np.ndarray
    color: np.ndarray

    def __len__(self):
        return len(self.x)

    def __getitem__(self, i):
        return (float(self.x[i]), float(self.y[i]), float(self.z[i]), tuple(float(c) for c in self.color[i]))

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    @classmethod
    def from_tuples(cls, samples):
        """Build Targets from a sequence of ``(x, y, depth, (r, g, b))`` tuples."""
        samples = list(samples)
        if not samples:
            raise ValueError("At least one target is required")
        x = np.array([s[0] for s in samples], dtype=float)
        y = np.array([s[1] for s in samples], dtype=float)
        z = np.array([s[2] for s in samples], dtype=float)
        color = np.array([s[3] for s in samples], dtype=float).reshape(len(samples), 3)
        return cls(x, y, z, color)


def as_targets(targets):
    """Accept Targets or any sequence of target tuples."""
    if isinstance(targets, Targets):
        if len(targets) == 0:
            raise ValueError("At least one target is required")
        return targets
    return Targets.from_tuples(targets)


def sample_targets(pixels, offset=(0.0, 0.0), count=config.DEFAULT_NUM_PARTICLES,
                   text_like=False, rng=None, depth_multiplier=None):
    """
    Sample ``count`` targets from the opaque pixels of an image.

    A pixel is opaque when its alpha is at least ``config.ALPHA_THRESHOLD``.
    Every sample is drawn uniformly from the opaque pixels, which is the
    distribution a pixel-by-pixel rejection loop converges to, but with a
    bounded amount of work. Duplicate pixels are expected for small images.

    Args:
        pixels: PixelBuffer, (H, W, 4) uint8 array or PIL image
        offset (tuple): placement offset (ox, oy) added to pixel coordinates
        count (int): number of targets to draw
        text_like (bool): text/symbol content, selects the 1.5 depth multiplier
        rng (np.random.Generator, optional): random source
        depth_multiplier (float, optional): overrides the text_like selection

    Returns:
        Targets: ``count`` samples

    Raises:
        InvalidDimensionsError: the buffer has zero width or height
        EmptySourceError: no pixel passes the alpha threshold
    """
    buffer = as_pixel_buffer(pixels)
    if buffer.width == 0 or buffer.height == 0:
        raise InvalidDimensionsError(f"Cannot sample a {buffer.width}x{buffer.height} image")
    count = int(count)
    if count < 1:
        raise ValueError(f"count must be positive, got {count}")

    if depth_multiplier is None:
        depth_multiplier = config.TEXT_DEPTH_MULTIPLIER if text_like else config.DEFAULT_DEPTH_MULTIPLIER
    if rng is None:
        rng = np.random.default_rng()

    opaque = np.flatnonzero(buffer.alpha.ravel() >= config.ALPHA_THRESHOLD)
    if opaque.size == 0:
        raise EmptySourceError(
            f"No pixel with alpha >= {config.ALPHA_THRESHOLD} in {buffer.width}x{buffer.height} image"
        )

    picks = opaque[rng.integers(0, opaque.size, size=count)]
    py, px = np.divmod(picks, buffer.width)

    rgb = buffer.data.reshape(-1, 4)[picks, :3].astype(np.float64) / 255.0
    brightness = rgb.sum(axis=1) / 3.0
    # White -> 0, black -> 1 before the multiplier
    depth = np.clip((1.0 - brightness) * depth_multiplier, 0.0, 1.0)

    ox, oy = offset
    logger.debug("Sampled %d targets from %d opaque pixels", count, opaque.size)
    return Targets(
        x=px.astype(np.float64) + ox,
        y=py.astype(np.float64) + oy,
        z=depth,
        color=rgb,
    )
