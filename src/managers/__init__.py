"""
Managers for configuration
"""

from .config_manager import ConfigManager
from .pattern_manager import PatternManager

__all__ = ['ConfigManager', 'PatternManager']
