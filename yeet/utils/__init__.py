# Yeet Utilities Package
"""
Shared utility functions and helpers for the Yeet launcher.
"""

from .helpers import config_dir, load_settings

__all__ = ["config_dir", "load_settings"]
