"""
User interface components for GlyphField.

This module contains pointer drag handling and snapshot controls.
"""

__all__ = ['ui_controls']
