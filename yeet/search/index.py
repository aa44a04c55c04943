"""
Search Index - Per-catalog text precomputed once for keystroke ranking.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchIndex:
    """Lowercased names and "name + keywords" texts, by catalog position."""
    names_lower: tuple[str, ...]
    texts: tuple[str, ...]
    texts_lower: tuple[str, ...]

    @classmethod
    def build(cls, apps) -> "SearchIndex":
        texts = tuple(" ".join([app.name, *app.keywords]) for app in apps)
        return cls(
            names_lower=tuple(app.name.lower() for app in apps),
            texts=texts,
            texts_lower=tuple(t.lower() for t in texts),
        )

    def __len__(self) -> int:
        return len(self.texts)
