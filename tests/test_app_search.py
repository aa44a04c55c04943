"""
Tests for the AppSearchHandler and the rapidfuzz scorer.

The handler runs against real catalogs; launching is patched so no
process is spawned.
"""

from unittest.mock import patch

import pytest

from conftest import TableScorer, make_app
from yeet.config import bootstrap
from yeet.search.app_search import AppSearchHandler, ResultItem
from yeet.search.fuzzy import RapidFuzzScorer
from yeet.search.ranking import RankingConfig
from yeet.services.applications import Catalog


def _catalog(count):
    return Catalog(make_app(f"App {i:02d}", f"app{i}") for i in range(count))


class TestRapidFuzzScorer:
    """Test the default fuzzy capability."""

    def test_typo_still_matches(self):
        scorer = RapidFuzzScorer()
        assert scorer.score("Firefox web browser", "firefx") is not None

    def test_close_match_beats_unrelated(self):
        scorer = RapidFuzzScorer()
        good = scorer.score("Firefox web browser", "firefx")
        bad = scorer.score("Visual Studio Code editor", "firefx") or 0
        assert good > bad

    def test_no_common_characters_is_no_match(self):
        assert RapidFuzzScorer().score("abc", "zzzz") is None

    def test_returns_int(self):
        assert isinstance(RapidFuzzScorer().score("Files", "files"), int)


class TestAppSearchHandler:
    """Test result conversion and activation."""

    def test_empty_query_returns_initial_results(self):
        handler = AppSearchHandler(_catalog(25), RankingConfig(initial_results=20, max_results=30))
        results = handler.get_results("")
        assert len(results) == 20
        assert [r.title for r in results[:2]] == ["App 00", "App 01"]

    def test_results_are_result_items(self):
        app = make_app("Firefox", "firefox", description="Web Browser")
        handler = AppSearchHandler(Catalog([app]))

        results = handler.get_results("")
        assert len(results) == 1
        assert isinstance(results[0], ResultItem)
        assert results[0].title == "Firefox"
        assert results[0].description == "Web Browser"
        assert results[0].app is app

    def test_shortcuts_on_first_nine_rows(self):
        handler = AppSearchHandler(_catalog(12), RankingConfig(initial_results=12, max_results=12))
        shortcuts = [r.shortcut for r in handler.get_results("")]
        assert shortcuts == [1, 2, 3, 4, 5, 6, 7, 8, 9, None, None, None]

    def test_fuzzy_search_finds_close_match(self):
        catalog = Catalog([
            make_app("Firefox", keywords=["web", "browser"]),
            make_app("Visual Studio Code", keywords=["editor"]),
            make_app("Files", keywords=["file", "manager"]),
        ])
        handler = AppSearchHandler(catalog)

        results = handler.get_results("firefx")  # Typo
        assert len(results) >= 1
        assert results[0].title == "Firefox"

    def test_substring_search_with_real_scorer(self):
        catalog = Catalog([make_app("Firefox"), make_app("GIMP")])
        handler = AppSearchHandler(catalog)
        assert [r.title for r in handler.get_results("fire")] == ["Firefox"]

    def test_injected_scorer_is_used(self):
        scorer = TableScorer({"Beta": 90})
        catalog = Catalog([make_app("Alpha"), make_app("Beta")])
        handler = AppSearchHandler(catalog, scorer=scorer)
        assert [r.title for r in handler.get_results("zq")] == ["Beta"]


class TestActivation:
    """Test launching from the visible results."""

    @pytest.fixture
    def handler(self):
        catalog = Catalog([make_app("Alpha", "alpha"), make_app("Beta", "beta")])
        handler = AppSearchHandler(catalog, terminal="kitty")
        handler.get_results("")
        return handler

    def test_activate_launches_visible_app(self, handler):
        with patch("yeet.search.app_search.launch_app", return_value=True) as launch:
            assert handler.activate(1) is True
        launch.assert_called_once_with(handler.catalog[1], "kitty")

    def test_activate_out_of_range(self, handler):
        with patch("yeet.search.app_search.launch_app") as launch:
            assert handler.activate(5) is False
            assert handler.activate(-1) is False
        launch.assert_not_called()

    def test_activate_follows_latest_results(self, handler):
        handler.scorer = TableScorer({"Beta": 90})
        handler.get_results("zq")
        with patch("yeet.search.app_search.launch_app", return_value=True) as launch:
            handler.activate(0)
        assert launch.call_args.args[0].name == "Beta"

    def test_shortcut_numbers(self, handler):
        with patch("yeet.search.app_search.launch_app", return_value=True) as launch:
            assert handler.activate_shortcut(1) is True
            assert handler.activate_shortcut(0) is False
            assert handler.activate_shortcut(10) is False
        assert launch.call_count == 1
        assert launch.call_args.args[0].name == "Alpha"

    def test_on_activate_callback(self, handler):
        results = handler.get_results("")
        with patch("yeet.search.app_search.launch_app", return_value=True) as launch:
            results[1].on_activate()
        launch.assert_called_once_with(handler.catalog[1], "kitty")


class TestBootstrap:
    """Test session setup from a settings file."""

    def test_builds_handler_from_settings(self, monkeypatch, apps_dir, tmp_settings):
        monkeypatch.setattr("yeet.services.applications.application_dirs", lambda: [apps_dir])

        handler = bootstrap(tmp_settings)

        assert handler.terminal == "kitty --single-instance"
        assert handler.config.max_results == 5
        assert [app.name for app in handler.catalog] == [
            "GIMP", "Firefox", "htop", "Notes", "Visual Studio Code",
        ]
        assert [r.title for r in handler.get_results("")] == ["GIMP", "Firefox", "htop"]
        assert [r.title for r in handler.get_results("todo")] == ["Notes"]
