"""
App Search Handler - Catalog search session used by the launcher window.

Wraps the catalog, ranking settings, fuzzy scorer and terminal command.
The window calls get_results() on every keystroke and activate() or
activate_shortcut() when the user picks a row (Enter, click, Alt+1..9).
"""

from dataclasses import dataclass
from typing import Callable, Optional

from loguru import logger

from yeet.search.fuzzy import RapidFuzzScorer
from yeet.search.ranking import RankingConfig, Scorer, rank
from yeet.services.launch import launch_app

MAX_SHORTCUTS = 9


@dataclass
class ResultItem:
    """A single app row as shown in the results list."""
    title: str
    description: str = ""
    icon: Optional[str] = None
    shortcut: Optional[int] = None  # Alt+N, first nine rows only
    on_activate: Optional[Callable] = None
    app: object = None


class AppSearchHandler:
    """Rank the catalog per query and launch the selected app."""

    name = "app_search"

    def __init__(
        self,
        catalog,
        config: RankingConfig = RankingConfig(),
        scorer: Optional[Scorer] = None,
        terminal: str = "foot",
    ):
        self.catalog = catalog
        self.config = config
        self.scorer = scorer or RapidFuzzScorer()
        self.terminal = terminal

        # Apps currently on screen, in display order
        self.visible_apps = []

    def rank(self, query: str) -> list[int]:
        return rank(self.catalog.search_index, query, self.config, self.scorer)

    def get_results(self, query: str) -> list[ResultItem]:
        self.visible_apps = [self.catalog[i] for i in self.rank(query)]
        return [
            self._app_to_result(app, position)
            for position, app in enumerate(self.visible_apps)
        ]

    def _app_to_result(self, app, position: int) -> ResultItem:
        return ResultItem(
            title=app.name,
            description=app.description or "",
            icon=app.icon,
            shortcut=position + 1 if position < MAX_SHORTCUTS else None,
            on_activate=lambda a=app: self.launch(a),
            app=app,
        )

    def activate(self, position: int) -> bool:
        """Launch the app at a row position of the last results."""
        if not 0 <= position < len(self.visible_apps):
            return False
        return self.launch(self.visible_apps[position])

    def activate_shortcut(self, number: int) -> bool:
        """Launch the app bound to Alt+<number>."""
        if not 1 <= number <= MAX_SHORTCUTS:
            return False
        return self.activate(number - 1)

    def launch(self, app) -> bool:
        logger.debug(f"Launching {app.name}")
        return launch_app(app, self.terminal)
