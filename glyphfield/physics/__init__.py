"""
Physics simulation components for GlyphField.

This module contains the spring-damper particle field.
"""

__all__ = ['particle_system']
