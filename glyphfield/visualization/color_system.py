"""
Color system module for GlyphField visualization.

Depth drives both particle size and opacity: near particles (z = 0) are
large and nearly opaque, far particles (z = 1) small and faint.
"""

import numpy as np

from .. import config


def hex_to_rgb(hex_color):
    """Convert hex color to RGB tuple (0-1 range)."""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) / 255.0 for i in (0, 2, 4))


def particle_sizes(z, max_size=config.MAX_PARTICLE_SIZE, min_size=config.MIN_PARTICLE_SIZE):
    """Particle diameter in canvas units: ``max - (max - min) * z``."""
    return max_size - (max_size - min_size) * np.asarray(z, dtype=float)


def particle_opacities(z, max_opacity=config.MAX_OPACITY, min_opacity=config.MIN_OPACITY):
    """Particle opacity: ``max - (max - min) * z``."""
    return max_opacity - (max_opacity - min_opacity) * np.asarray(z, dtype=float)


def particle_rgba(colors, z):
    """
    RGBA colors for particles, with depth-derived opacity as alpha.

    Args:
        colors (np.ndarray): RGB in [0, 1], shape (N, 3)
        z (np.ndarray): depth per particle, shape (N,)

    Returns:
        np.ndarray: RGBA, shape (N, 4)
    """
    colors = np.asarray(colors, dtype=float).reshape(-1, 3)
    rgba = np.empty((len(colors), 4))
    rgba[:, :3] = colors
    rgba[:, 3] = particle_opacities(z)
    return rgba
