"""
UI controls module for GlyphField.

Turns matplotlib mouse events into pointer drag input for a particle
animation, plus a snapshot button that saves the current frame.
"""

import logging
import os
import time
from datetime import datetime

from matplotlib.widgets import Button

logger = logging.getLogger(__name__)


class DragController:
    """
    Feeds mouse drags on ``ax`` into a ParticleAnimation.

    Press and motion set the drag position and a velocity in canvas units
    per second, estimated from the previous drag sample. Release clears the
    drag input.
    """

    def __init__(self, fig, ax, animation, clock=time.perf_counter, output_dir='output'):
        """
        Initialize the drag controller.

        Args:
            fig: Matplotlib figure
            ax: Axes showing the particle field
            animation (ParticleAnimation): receives drag input
            clock (callable): seconds clock used for drag velocity
            output_dir (str): folder for snapshots
        """
        self.fig = fig
        self.ax = ax
        self.animation = animation
        self.clock = clock
        self.output_dir = output_dir
        self.dragging = False
        self._last_sample = None  # (t, x, y)
        self.connected_handlers = []
        self._snapshot_button = None

    def connect_events(self):
        """Connect press, motion and release handlers."""
        self.disconnect_events()
        canvas = self.fig.canvas
        self.connected_handlers = [
            canvas.mpl_connect('button_press_event', self.on_press),
            canvas.mpl_connect('motion_notify_event', self.on_motion),
            canvas.mpl_connect('button_release_event', self.on_release),
        ]

    def disconnect_events(self):
        for cid in self.connected_handlers:
            self.fig.canvas.mpl_disconnect(cid)
        self.connected_handlers = []

    def add_snapshot_button(self):
        btn_ax = self.fig.add_axes([0.02, 0.02, 0.14, 0.045])
        self._snapshot_button = Button(btn_ax, 'Save Snapshot')
        self._snapshot_button.on_clicked(lambda event: self.save_snapshot())
        return self._snapshot_button

    def _in_field(self, event):
        return event.inaxes is self.ax and event.xdata is not None and event.ydata is not None

    def _sample(self, event):
        now = self.clock()
        x, y = float(event.xdata), float(event.ydata)
        velocity = (0.0, 0.0)
        if self._last_sample is not None:
            t0, x0, y0 = self._last_sample
            dt = now - t0
            if dt > 0:
                velocity = ((x - x0) / dt, (y - y0) / dt)
        self._last_sample = (now, x, y)
        self.animation.begin_drag((x, y), velocity)

    def on_press(self, event):
        if not self._in_field(event):
            return
        self.dragging = True
        self._last_sample = None
        self._sample(event)

    def on_motion(self, event):
        if not self.dragging or not self._in_field(event):
            return
        self._sample(event)

    def on_release(self, event):
        if not self.dragging:
            return
        self.dragging = False
        self._last_sample = None
        self.animation.end_drag()

    def save_snapshot(self, path=None):
        """Save the current figure as a PNG and return its path."""
        if path is None:
            os.makedirs(self.output_dir, exist_ok=True)
            ts = datetime.now().strftime('%Y%m%d_%H%M%S_%f')
            path = os.path.join(self.output_dir, f'glyphfield_{ts}.png')
        self.fig.savefig(path, facecolor=self.fig.get_facecolor())
        logger.info("Saved snapshot to %s", path)
        return path
