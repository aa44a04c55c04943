# Yeet Services Package
"""
Backend services for the Yeet launcher.

Services handle desktop entry discovery and launching.
"""

from .launch import (
    LaunchCommandError,
    ParseFailure,
    build_invocation,
    launch_app,
    sanitize_exec,
)
from .applications import (
    Application,
    Catalog,
    CustomApp,
    DiscoveryError,
    build_catalog,
    discover_apps,
)

__all__ = [
    "Application",
    "Catalog",
    "CustomApp",
    "DiscoveryError",
    "LaunchCommandError",
    "ParseFailure",
    "build_catalog",
    "build_invocation",
    "discover_apps",
    "launch_app",
    "sanitize_exec",
]
