# Yeet Launcher Package
"""
Application launcher core for Wayland.

Components:
  - Registry (services.applications): Desktop entry discovery and catalog
  - Launch (services.launch): Shell-free launch command building
  - Search (search): Incremental ranking of the catalog per keystroke
"""

__version__ = "0.1.0.dev0"
