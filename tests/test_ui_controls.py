from types import SimpleNamespace

import matplotlib.pyplot as plt
import pytest

from glyphfield.animation import ParticleAnimation
from glyphfield.core.content import PixelBuffer
from glyphfield.ui.ui_controls import DragController
from glyphfield.visualization.visualization_core import prepare_figure


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def setup(red_dot, tmp_path):
    anim = ParticleAnimation(canvas_size=(100, 100), count=10, seed=2)
    anim.set_content(PixelBuffer.from_array(red_dot))
    fig, ax, _ = prepare_figure(anim.canvas_size)
    clock = FakeClock()
    controller = DragController(fig, ax, anim, clock=clock, output_dir=str(tmp_path))
    yield controller, anim, ax, clock
    plt.close(fig)


def event(ax, x, y):
    return SimpleNamespace(inaxes=ax, xdata=x, ydata=y)


def test_press_move_release(setup):
    controller, anim, ax, clock = setup

    controller.on_press(event(ax, 10, 20))
    assert anim.drag_position == (10.0, 20.0)
    assert anim.drag_velocity == (0.0, 0.0)

    clock.now = 0.1
    controller.on_motion(event(ax, 20, 15))
    assert anim.drag_position == (20.0, 15.0)
    assert anim.drag_velocity == pytest.approx((100.0, -50.0))

    ticks = anim.field.tick_count
    controller.on_release(event(ax, 20, 15))
    assert anim.drag_position is None and anim.drag_velocity is None
    assert anim.field.tick_count == ticks + 1


def test_events_outside_field_are_ignored(setup):
    controller, anim, ax, _ = setup

    controller.on_press(event(None, 10, 10))
    controller.on_motion(event(ax, 10, 10))
    assert anim.drag_position is None

    controller.on_release(event(ax, 10, 10))
    assert anim.field.tick_count == 0


def test_connect_and_disconnect(setup):
    controller, *_ = setup
    controller.connect_events()
    assert len(controller.connected_handlers) == 3
    controller.disconnect_events()
    assert controller.connected_handlers == []


def test_snapshot_written(setup, tmp_path):
    controller, *_ = setup
    controller.add_snapshot_button()

    path = controller.save_snapshot()

    assert path.startswith(str(tmp_path))
    assert (tmp_path / path.split("/")[-1]).exists()
