"""
API route modules
"""

from . import patterns

__all__ = ['patterns']
