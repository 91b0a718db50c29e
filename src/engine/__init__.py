"""
Rendering engine
"""

from .pattern_engine import PatternEngine

__all__ = ['PatternEngine']
