"""
Visualization components for GlyphField.

This module contains depth-based color/size mapping and matplotlib rendering.
"""

__all__ = ['visualization_core', 'color_system']
