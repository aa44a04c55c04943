"""
Yeet Launcher - Session setup

Builds everything the launcher window needs for one session: settings,
the app catalog and the search handler. The window owns the returned
handler and calls get_results() on every keystroke.

Usage:
  from yeet.config import bootstrap
  handler = bootstrap()
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from yeet.search.app_search import AppSearchHandler
from yeet.search.ranking import RankingConfig
from yeet.services.applications import discover_apps
from yeet.utils.helpers import load_settings


def bootstrap(settings_path: Optional[Path] = None) -> AppSearchHandler:
    """Load settings, discover apps and create the search handler."""
    settings = load_settings(settings_path)
    catalog = discover_apps(settings)

    handler = AppSearchHandler(
        catalog,
        config=RankingConfig.from_settings(settings),
        terminal=settings["general"]["terminal"],
    )

    logger.info(f"Yeet launcher initialized with {len(catalog)} apps")
    return handler
