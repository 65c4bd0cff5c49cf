"""
Particle system module for GlyphField.

This module handles spring-damper particle physics with optional pointer
drag forcing, particle creation with scattered starting positions, and
re-targeting of existing particles when the source image changes.

Particle state is kept in a dict of parallel numpy arrays, one row per
particle index:

    x, y                 current position
    base_x, base_y       target (rest) position
    density              spring multiplier in [5, 20), fixed at creation
    z                    depth in [0, 1]
    color                RGB in [0, 1], shape (N, 3)
    velocity_x, velocity_y
"""

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Optional, Tuple

import numpy as np

from .. import config
from ..core.sampler import as_targets
from ..errors import FieldNotInitializedError

logger = logging.getLogger(__name__)

TARGET_KEYS = ('base_x', 'base_y', 'z', 'color')
MOTION_KEYS = ('x', 'y', 'velocity_x', 'velocity_y')


def damping_for(first_frame):
    """Damping factor for first-appearance or steady-state mode."""
    return config.FIRST_FRAME_DAMPING if first_frame else config.STEADY_DAMPING


def drag_force(distance, drag_velocity=None):
    """
    Scalar drag force at ``distance`` from the drag point.

    Falls off linearly to zero at ``config.DRAG_RADIUS`` and is boosted by
    the drag speed (the larger of the two velocity components).

    Args:
        distance (float or np.ndarray): distance(s) from the drag point
        drag_velocity (tuple, optional): pointer velocity (dx, dy)

    Returns:
        float or np.ndarray: drag force, same shape as ``distance``
    """
    velocity_f = 0.0
    if drag_velocity is not None:
        velocity_f = max(abs(drag_velocity[0]), abs(drag_velocity[1]))
    radius = config.DRAG_RADIUS
    return (radius - np.minimum(distance, radius)) / radius + velocity_f * config.DRAG_VELOCITY_GAIN


def target_fields(targets, count):
    """
    Expand targets to ``count`` particles, wrapping by index.

    Returns:
        dict: fresh ``base_x``, ``base_y``, ``z`` and ``color`` arrays
    """
    targets = as_targets(targets)
    idx = np.arange(count) % len(targets)
    return {
        'base_x': np.asarray(targets.x, dtype=float)[idx],
        'base_y': np.asarray(targets.y, dtype=float)[idx],
        'z': np.asarray(targets.z, dtype=float)[idx],
        'color': np.asarray(targets.color, dtype=float).reshape(-1, 3)[idx],
    }


def create_particles(targets, canvas_size, num_particles=None, rng=None):
    """
    Create a particle system pulled toward ``targets``.

    Particles start scattered over x in [-W, 2W) and y in [0, 2H) so they
    visibly fly in, with zero velocity.

    Args:
        targets: Targets or sequence of (x, y, depth, color) tuples
        canvas_size (tuple): (W, H) of the canvas
        num_particles (int, optional): particle count, defaults to len(targets)
        rng (np.random.Generator, optional): random source

    Returns:
        dict: Particle system dictionary
    """
    targets = as_targets(targets)
    if num_particles is None:
        num_particles = len(targets)
    if rng is None:
        rng = np.random.default_rng()
    width, height = canvas_size

    system = target_fields(targets, num_particles)
    system['x'] = rng.uniform(-width, width * 2, size=num_particles)
    system['y'] = rng.uniform(0, height * 2, size=num_particles)
    system['density'] = rng.uniform(*config.DENSITY_RANGE, size=num_particles)
    system['velocity_x'] = np.zeros(num_particles)
    system['velocity_y'] = np.zeros(num_particles)
    return system


def update_particles(system, drag_position=None, drag_velocity=None, first_frame=False, rng=None):
    """
    Advance every particle by one tick, in place.

    Per particle: spring acceleration toward the base scaled by density,
    integrate then damp, move, apply drag forcing at the new position, then
    add uniform velocity noise.

    Args:
        system (dict): Particle system dictionary
        drag_position (tuple, optional): pointer position (x, y)
        drag_velocity (tuple, optional): pointer velocity (dx, dy)
        first_frame (bool): use the first-appearance damping
        rng (np.random.Generator, optional): random source for the noise
    """
    if rng is None:
        rng = np.random.default_rng()
    x, y = system['x'], system['y']
    vx, vy = system['velocity_x'], system['velocity_y']
    n = len(x)

    spring = config.SPRING_CONSTANT * system['density']
    ax = (system['base_x'] - x) * spring
    ay = (system['base_y'] - y) * spring

    damping = damping_for(first_frame)
    vx += ax
    vx *= damping
    vy += ay
    vy *= damping

    x += vx
    y += vy

    if drag_position is not None:
        drag_dx = x - drag_position[0]
        drag_dy = y - drag_position[1]
        force = drag_force(np.hypot(drag_dx, drag_dy), drag_velocity) * config.DRAG_STRENGTH
        vx += drag_dx * force
        vy += drag_dy * force

    noise = config.NOISE_LEVEL
    vx += rng.uniform(-noise, noise, size=n)
    vy += rng.uniform(-noise, noise, size=n)


@dataclass
class Particle:
    """A single particle, as exposed to renderers and tests."""

    x: float
    y: float
    base_x: float
    base_y: float
    density: float
    z: float
    color: Tuple[float, float, float]
    velocity_x: float = 0.0
    velocity_y: float = 0.0

    def update(self, drag_position=None, drag_velocity=None, first_frame=False, rng=None):
        """
        Scalar form of ``update_particles`` for one particle.

        ``ParticleField`` ticks through the vectorized ``update_particles``;
        this is the per-particle reference it is checked against.
        """
        if rng is None:
            rng = np.random.default_rng()
        dx = self.base_x - self.x
        dy = self.base_y - self.y

        ax = dx * config.SPRING_CONSTANT * self.density
        ay = dy * config.SPRING_CONSTANT * self.density

        damping = damping_for(first_frame)
        self.velocity_x = (self.velocity_x + ax) * damping
        self.velocity_y = (self.velocity_y + ay) * damping

        self.x += self.velocity_x
        self.y += self.velocity_y

        if drag_position is not None:
            drag_dx = self.x - drag_position[0]
            drag_dy = self.y - drag_position[1]
            force = drag_force(np.hypot(drag_dx, drag_dy), drag_velocity)
            self.velocity_x += drag_dx * force * config.DRAG_STRENGTH
            self.velocity_y += drag_dy * force * config.DRAG_STRENGTH

        noise = config.NOISE_LEVEL
        self.velocity_x += rng.uniform(-noise, noise)
        self.velocity_y += rng.uniform(-noise, noise)


class ParticleField:
    """
    Fixed-size particle field driven by an external clock.

    The particle count is fixed when the field is built. ``initialize``
    creates the particles once; afterwards ``retarget`` only swaps their
    base position, depth and color, so motion carries over between shapes.
    All state access goes through one lock, so a tick never sees a
    half-applied retarget.
    """

    def __init__(self, count=config.DEFAULT_NUM_PARTICLES, rng=None, seed=None, first_frame=False):
        count = int(count)
        if count < 1:
            raise ValueError(f"Particle count must be positive, got {count}")
        self._count = count
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.first_frame = first_frame
        self.tick_count = 0
        self._system = None
        self._lock = Lock()

    @property
    def count(self) -> int:
        return self._count

    @property
    def is_initialized(self) -> bool:
        return self._system is not None

    def initialize(self, targets, canvas_size) -> bool:
        """
        Create the particles, or retarget them if they already exist.

        Returns:
            bool: True if particles were created by this call
        """
        with self._lock:
            if self._system is None:
                self._system = create_particles(targets, canvas_size, self._count, self.rng)
                logger.info("Created %d particles on %sx%s canvas", self._count, *canvas_size)
                return True
        self.retarget(targets)
        return False

    def retarget(self, targets):
        """Point every particle at ``targets[i % len(targets)]``."""
        targets = as_targets(targets)
        fields = target_fields(targets, self._count)
        with self._lock:
            if self._system is None:
                raise FieldNotInitializedError("Cannot retarget before particles are created")
            self._system.update(fields)
        logger.debug("Retargeted %d particles to %d targets", self._count, len(targets))

    def tick(self, drag_position=None, drag_velocity=None, first_frame=None):
        """Advance the simulation by one clock tick. No-op before initialize."""
        if first_frame is None:
            first_frame = self.first_frame
        with self._lock:
            if self._system is None:
                return
            update_particles(self._system, drag_position, drag_velocity, first_frame, self.rng)
            self.tick_count += 1

    def run(self, ticks, drag_position=None, drag_velocity=None, first_frame=None):
        for _ in range(int(ticks)):
            self.tick(drag_position, drag_velocity, first_frame)

    def _column(self, *keys):
        with self._lock:
            if self._system is None:
                return np.zeros((0, len(keys)))
            return np.column_stack([self._system[k] for k in keys])

    def positions(self) -> np.ndarray:
        return self._column('x', 'y')

    def bases(self) -> np.ndarray:
        return self._column('base_x', 'base_y')

    def velocities(self) -> np.ndarray:
        return self._column('velocity_x', 'velocity_y')

    def depths(self) -> np.ndarray:
        return self._column('z')[:, 0]

    def densities(self) -> np.ndarray:
        return self._column('density')[:, 0]

    def colors(self) -> np.ndarray:
        with self._lock:
            if self._system is None:
                return np.zeros((0, 3))
            return self._system['color'].copy()

    def snapshot(self) -> Optional[dict]:
        """Copy of every state array, or None before initialize."""
        with self._lock:
            if self._system is None:
                return None
            return {k: v.copy() for k, v in self._system.items()}

    def particles(self):
        """List of Particle views (copies) in index order."""
        state = self.snapshot()
        if state is None:
            return []
        return [
            Particle(
                x=float(state['x'][i]), y=float(state['y'][i]),
                base_x=float(state['base_x'][i]), base_y=float(state['base_y'][i]),
                density=float(state['density'][i]), z=float(state['z'][i]),
                color=tuple(float(c) for c in state['color'][i]),
                velocity_x=float(state['velocity_x'][i]), velocity_y=float(state['velocity_y'][i]),
            )
            for i in range(self._count)
        ]
