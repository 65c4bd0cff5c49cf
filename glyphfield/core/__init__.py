"""
Core modules for GlyphField.

This module contains content descriptors, rasterization and the image
sampler that turns pixels into particle targets.
"""

__all__ = ['content', 'rasterize', 'sampler']
