"""
Configuration module for GlyphField.

This module contains global constants, default parameters, and configuration
settings used throughout the GlyphField particle system.
"""

# Particle system parameters
DEFAULT_NUM_PARTICLES = 800  # Fixed for the lifetime of a field
DENSITY_RANGE = (5.0, 20.0)  # Per-particle spring multiplier, [low, high)

# Clock
TICK_RATE_HZ = 120  # Physics constants below are tuned for this rate
TICK_INTERVAL_MS = 1000.0 / TICK_RATE_HZ

# Spring-damper physics (fixed, not user tunable)
SPRING_CONSTANT = 0.002
FIRST_FRAME_DAMPING = 0.55  # Looser settle on first appearance
STEADY_DAMPING = 0.7
NOISE_LEVEL = 0.1  # Uniform velocity jitter per tick, per component

# Pointer drag forcing
DRAG_RADIUS = 200.0  # Force falls to the velocity term beyond this distance
DRAG_VELOCITY_GAIN = 0.00005
DRAG_STRENGTH = 0.005

# Image sampling
ALPHA_THRESHOLD = 128  # Minimum 8-bit alpha for a pixel to be sampled
TEXT_DEPTH_MULTIPLIER = 1.5  # Text and symbols get exaggerated depth
DEFAULT_DEPTH_MULTIPLIER = 1.0

# Rasterization defaults (Pillow)
TEXT_FONT_SIZE = 80
TEXT_FRAME_WIDTH = 800
SYMBOL_FONT_SIZE = 200
TEXT_COLOR = (255, 255, 255, 255)
FONT_CANDIDATES = [
    "DejaVuSans-Bold.ttf",
    "Arial Rounded Bold.ttf",
    "Arial Bold.ttf",
    "arialbd.ttf",
]

# Rendering
MAX_PARTICLE_SIZE = 4.0
MIN_PARTICLE_SIZE = 1.0
MAX_OPACITY = 0.9
MIN_OPACITY = 0.2
BACKGROUND_COLOR = "#000000"
DEFAULT_CANVAS_SIZE = (1000, 600)
FIGURE_DPI = 100

# Animation parameters
ANIMATION_FRAMES = 1200
WINDOW_TITLE = "GlyphField"
