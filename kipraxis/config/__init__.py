"""
Configuration module for the usage core.
"""
from .settings import KipraxisConfig, get_config, load_config, reload_config

__all__ = [
    'KipraxisConfig',
    'get_config',
    'load_config',
    'reload_config'
]
