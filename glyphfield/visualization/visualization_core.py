"""
Core visualization module for GlyphField.

Draws the particle field as a matplotlib scatter of circles whose size and
opacity come from particle depth, and drives it with FuncAnimation at the
physics tick rate. One data unit equals one canvas pixel, with y growing
downward like screen coordinates.
"""

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from .. import config
from .color_system import hex_to_rgb, particle_rgba, particle_sizes


def marker_areas(sizes, dpi=config.FIGURE_DPI):
    """Convert particle diameters in pixels to scatter areas in points^2."""
    points = np.asarray(sizes, dtype=float) * 72.0 / dpi
    return points ** 2


def prepare_figure(canvas_size, dpi=config.FIGURE_DPI, background=config.BACKGROUND_COLOR):
    """
    Create a borderless figure sized to the canvas.

    Args:
        canvas_size (tuple): (W, H) in pixels
        dpi (int): figure dpi
        background (str): background color as "#rrggbb"

    Returns:
        tuple: (fig, ax, scatter)
    """
    width, height = canvas_size
    face = hex_to_rgb(background)
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi, facecolor=face)
    try:
        fig.canvas.manager.set_window_title(config.WINDOW_TITLE)
    except AttributeError:
        pass  # Non-interactive backends have no window manager

    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_facecolor(face)
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_axis_off()

    scatter = ax.scatter([], [], s=[], linewidths=0)
    return fig, ax, scatter


def update_scatter(scatter, field, dpi=config.FIGURE_DPI):
    """
    Push the field's current state into a scatter collection.

    Each circle is drawn in the square whose top-left corner is the particle
    position, so its center sits half a diameter down and to the right.
    """
    state = field.snapshot()
    if state is None:
        scatter.set_offsets(np.zeros((0, 2)))
        scatter.set_sizes([])
        return (scatter,)

    depths = state['z']
    sizes = particle_sizes(depths)
    positions = np.column_stack([state['x'], state['y']])

    scatter.set_offsets(positions + sizes[:, np.newaxis] / 2.0)
    scatter.set_sizes(marker_areas(sizes, dpi))
    scatter.set_facecolors(particle_rgba(state['color'], depths))
    return (scatter,)


def animate(animation, fig, scatter, frames=config.ANIMATION_FRAMES,
            interval=config.TICK_INTERVAL_MS, dpi=config.FIGURE_DPI):
    """
    Run one physics tick per animation frame.

    Args:
        animation (ParticleAnimation): the session to tick and draw
        fig: Matplotlib figure
        scatter: scatter collection from ``prepare_figure``
        frames (int): number of frames
        interval (float): milliseconds between frames

    Returns:
        FuncAnimation: keep a reference to it while the window is open
    """
    def update(frame):
        animation.step()
        return update_scatter(scatter, animation.field, dpi)

    return FuncAnimation(fig, update, frames=frames, interval=interval, blit=False)
