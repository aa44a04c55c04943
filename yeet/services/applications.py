"""
Applications Service - Discover desktop entries and build the app catalog.

Sources are scanned in precedence order:
  - $XDG_DATA_HOME/applications (user entries)
  - /usr/share/applications
  - /usr/local/share/applications
  - Flatpak exports (user, then system)
  - apps.extra_dirs from settings

Custom apps from settings are appended after discovery. The final catalog
puts favorites first, then sorts case-insensitively by name. Sorting is
stable, so same-named entries keep discovery order.
"""

import os
from collections.abc import Sequence
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Iterable, Iterator, Optional

from loguru import logger

from yeet.search.index import SearchIndex

DESKTOP_GROUP = "Desktop Entry"
LOCALE = "en"
ESCAPES = {"s": " ", "n": "\n", "t": "\t", "r": "\r", "\\": "\\", ";": ";"}


class DiscoveryError(Exception):
    """A desktop entry file could not be read or parsed."""


@dataclass(frozen=True)
class Application:
    """A launchable catalog entry."""
    name: str
    exec: str
    icon: Optional[str] = None
    description: Optional[str] = None
    keywords: tuple[str, ...] = ()
    terminal: bool = False


@dataclass(frozen=True)
class CustomApp:
    """User-defined app from the [[apps.custom]] settings table."""
    name: str
    exec: str
    icon: Optional[str] = None
    keywords: tuple[str, ...] = ()

    def to_application(self) -> Application:
        return Application(
            name=self.name,
            exec=self.exec,
            icon=self.icon,
            keywords=self.keywords,
        )


class Catalog(Sequence):
    """
    Read-only, ordered collection of applications for one session.

    There is no way to patch a catalog; build a new one instead. The
    search index is derived lazily and lives exactly as long as the catalog.
    """

    def __init__(self, apps: Iterable[Application] = ()):
        self._apps = tuple(apps)

    def __getitem__(self, index):
        return self._apps[index]

    def __len__(self) -> int:
        return len(self._apps)

    def __repr__(self) -> str:
        return f"Catalog({len(self._apps)} apps)"

    @cached_property
    def search_index(self) -> SearchIndex:
        return SearchIndex.build(self._apps)


def _data_home() -> Path:
    xdg = os.environ.get("XDG_DATA_HOME")
    return Path(xdg) if xdg else Path.home() / ".local" / "share"


def application_dirs() -> list[Path]:
    """Default desktop entry directories, highest precedence first."""
    data_home = _data_home()
    return [
        data_home / "applications",
        Path("/usr/share/applications"),
        Path("/usr/local/share/applications"),
        data_home / "flatpak" / "exports" / "share" / "applications",
        Path("/var/lib/flatpak/exports/share/applications"),
    ]


def iter_desktop_files(sources: Iterable[Path]) -> Iterator[Path]:
    """Yield *.desktop files, directory by directory in source order."""
    for source in sources:
        source = Path(source)
        if not source.is_dir():
            continue
        try:
            yield from sorted(source.rglob("*.desktop"))
        except OSError:
            logger.warning(f"Could not scan {source}")


def _unescape(value: str) -> str:
    """Decode desktop entry string escapes (\\s, \\n, \\t, \\r, \\\\)."""
    result = []
    chars = iter(value)
    for c in chars:
        if c != "\\":
            result.append(c)
            continue
        nxt = next(chars, None)
        if nxt is None:
            result.append("\\")
        elif nxt in ESCAPES:
            result.append(ESCAPES[nxt])
        else:
            result.append("\\" + nxt)
    return "".join(result)


def _split_list(value: str) -> list[str]:
    """Split a ';'-separated list value, honouring '\\;' inside items."""
    items = []
    current = []
    chars = iter(value)
    for c in chars:
        if c == "\\":
            nxt = next(chars, "")
            current.append(c + nxt)
        elif c == ";":
            items.append("".join(current))
            current = []
        else:
            current.append(c)
    items.append("".join(current))
    return [item for item in (_unescape(i).strip() for i in items) if item]


def read_desktop_group(path: Path) -> dict[str, str]:
    """
    Read the raw key/value pairs of the [Desktop Entry] group.

    Every line stands on its own: surrounding whitespace is ignored,
    comments and lines without '=' are skipped. A repeated key keeps
    its last value.

    Raises:
        DiscoveryError: If the file can't be read or has no [Desktop Entry] group
    """
    try:
        with open(path, encoding="utf-8-sig") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise DiscoveryError(f"{path}: {e}") from e

    entry = {}
    found = False
    group = None

    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("[") and line.endswith("]"):
            group = line[1:-1]
            found = found or group == DESKTOP_GROUP
            continue
        if group != DESKTOP_GROUP or "=" not in line:
            continue
        key, _, value = line.partition("=")
        entry[key.strip()] = value.strip()

    if not found:
        raise DiscoveryError(f"{path}: missing [{DESKTOP_GROUP}] group")
    return entry


def _localized(entry: dict, key: str) -> Optional[str]:
    return entry.get(f"{key}[{LOCALE}]") or entry.get(key)


def _is_true(entry: dict, key: str) -> bool:
    return entry.get(key, "false").lower() == "true"


def parse_desktop_entry(path: Path) -> Optional[Application]:
    """
    Parse a desktop entry file into an Application.

    Returns:
        Application, or None if the entry is hidden or has no Name/Exec

    Raises:
        DiscoveryError: If the file can't be read or isn't a desktop entry
    """
    entry = read_desktop_group(path)

    if _is_true(entry, "NoDisplay") or _is_true(entry, "Hidden"):
        return None

    # Exec stays raw; its quoting is handled by the launch sanitizer
    exec_str = entry.get("Exec", "")
    name = _unescape(_localized(entry, "Name") or "").strip()
    if not exec_str or not name:
        return None

    icon = _unescape(entry.get("Icon", "")).strip()
    description = _unescape(_localized(entry, "Comment") or "").strip()

    return Application(
        name=name,
        exec=exec_str,
        icon=icon or None,
        description=description or None,
        keywords=tuple(_split_list(_localized(entry, "Keywords") or "")),
        terminal=_is_true(entry, "Terminal"),
    )


def parse_custom_apps(raw_entries) -> list[CustomApp]:
    """
    Validate [[apps.custom]] tables from settings.

    Malformed entries are skipped with a warning.
    """
    custom = []
    for i, raw in enumerate(raw_entries or []):
        if not isinstance(raw, dict):
            logger.warning(f"Skipping malformed custom app #{i}: not a table")
            continue

        name = str(raw.get("name") or "").strip()
        exec_str = str(raw.get("exec") or "").strip()
        if not name or not exec_str:
            logger.warning(f"Skipping custom app #{i}: missing 'name' or 'exec' field")
            continue

        keywords = raw.get("keywords") or []
        if isinstance(keywords, str):
            keywords = [keywords]

        custom.append(CustomApp(
            name=name,
            exec=exec_str,
            icon=raw.get("icon") or None,
            keywords=tuple(str(k) for k in keywords),
        ))
    return custom


def build_catalog(
    sources: Iterable[Path],
    custom_entries: Iterable[CustomApp] = (),
    exclude: Iterable[str] = (),
    favorites: Iterable[str] = (),
) -> Catalog:
    """
    Discover desktop entries and build the ordered catalog.

    Args:
        sources: Directories to scan, in precedence order
        custom_entries: User-defined apps, appended after discovery
        exclude: Display names never added to the catalog
        favorites: Display names sorted ahead of everything else

    Returns:
        Catalog with favorites first, then case-insensitive name order
    """
    exclude = set(exclude)
    favorites = set(favorites)
    apps = []
    skipped = 0

    for path in iter_desktop_files(sources):
        try:
            app = parse_desktop_entry(path)
        except DiscoveryError as e:
            logger.debug(f"Skipping desktop entry: {e}")
            skipped += 1
            continue

        if app is None or app.name in exclude:
            skipped += 1
            continue

        apps.append(app)

    for custom in custom_entries:
        if not custom.name or not custom.exec or custom.name in exclude:
            continue
        apps.append(custom.to_application())

    apps.sort(key=lambda a: (a.name not in favorites, a.name.lower()))

    logger.debug(f"Catalog built with {len(apps)} apps ({skipped} entries skipped)")
    return Catalog(apps)


def discover_apps(settings: dict) -> Catalog:
    """
    Build the catalog from default directories and the [apps] settings.

    Args:
        settings: Merged settings from load_settings()
    """
    apps_settings = settings.get("apps", {})
    extra_dirs = [Path(d).expanduser() for d in apps_settings.get("extra_dirs", [])]

    return build_catalog(
        sources=application_dirs() + extra_dirs,
        custom_entries=parse_custom_apps(apps_settings.get("custom", [])),
        exclude=apps_settings.get("exclude", []),
        favorites=apps_settings.get("favorites", []),
    )
