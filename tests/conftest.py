"""
Shared test fixtures for the Yeet launcher test suite.

Provides temporary desktop entry directories and settings files that use
real file I/O (no mocking of the filesystem).
"""

import pytest
import toml

from yeet.search.ranking import Scorer
from yeet.services.applications import Application


def _desktop_file(name, exec_str, **extra):
    lines = ["[Desktop Entry]", "Type=Application", f"Name={name}", f"Exec={exec_str}"]
    for key, value in extra.items():
        lines.append(f"{key}={value}")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_desktop(tmp_path):
    """Write a .desktop file into a directory under tmp_path."""
    def _write(filename, name, exec_str, directory="applications", **extra):
        target = tmp_path / directory
        target.mkdir(parents=True, exist_ok=True)
        path = target / filename
        path.write_text(_desktop_file(name, exec_str, **extra))
        return path
    return _write


@pytest.fixture
def apps_dir(write_desktop, tmp_path):
    """A real applications directory with a handful of common entries."""
    write_desktop("firefox.desktop", "Firefox", "firefox %u",
                  Icon="firefox", Comment="Web Browser", Keywords="web;browser;internet;")
    write_desktop("code.desktop", "Visual Studio Code", "code %F",
                  Icon="code", Keywords="editor;ide;")
    write_desktop("gimp.desktop", "GIMP", "gimp-2.10 %U", Icon="gimp")
    write_desktop("htop.desktop", "htop", "htop", Terminal="true")
    return tmp_path / "applications"


@pytest.fixture
def tmp_settings(tmp_path):
    """Create a real settings TOML file with all sections."""
    settings_path = tmp_path / "config.toml"
    data = {
        "general": {"max_results": 5, "initial_results": 3, "terminal": "kitty --single-instance"},
        "search": {"min_score": 40, "score_threshold": 0.5, "prefer_prefix": True},
        "apps": {
            "favorites": ["GIMP"],
            "exclude": [],
            "custom": [
                {"name": "Notes", "exec": "foot -e nvim notes.md", "keywords": ["todo"]},
            ],
        },
    }
    settings_path.write_text(toml.dumps(data))
    return settings_path


def make_app(name, exec_str="true", keywords=(), terminal=False, description=None):
    """Create an Application without touching the filesystem."""
    return Application(
        name=name,
        exec=exec_str,
        description=description,
        keywords=tuple(keywords),
        terminal=terminal,
    )


class TableScorer(Scorer):
    """Scorer returning fixed scores per text, None for unknown texts."""

    def __init__(self, scores):
        self.scores = scores
        self.calls = []

    def score(self, text, query):
        self.calls.append((text, query))
        return self.scores.get(text)
