"""
Utilities package for the image path-prefix renamer
"""

from .config_loader import ConfigLoader, DEFAULT_SETTINGS, load_config, validate_settings

__all__ = [
    'ConfigLoader',
    'DEFAULT_SETTINGS',
    'load_config',
    'validate_settings',
]
