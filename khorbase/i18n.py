"""Per-language dictionaries of translated strings."""

from __future__ import annotations

from typing import Callable

Fallback = Callable[[str, str], str]


class Dictionary:
    """Tag-to-text mapping for one language."""

    def __init__(self, lang: str) -> None:
        self.lang = lang
        self._values: dict[str, str] = {}

    def clear(self) -> None:
        self._values.clear()

    def get_value(self, tag: str, fallback: Fallback | None = None) -> str:
        """Return the text for ``tag``.

        A missing tag yields ``fallback(lang, tag)`` when a fallback is given,
        otherwise an empty string.
        """
        if tag in self._values:
            return self._values[tag]
        if fallback is not None:
            return fallback(self.lang, tag)
        return ""

    def append_value(self, tag: str, value: str) -> None:
        """Add ``value`` for ``tag``; an existing value is kept."""
        self._values.setdefault(tag, value)


class Internalization:
    """A library of dictionaries keyed by language."""

    def __init__(self) -> None:
        self._library: dict[str, Dictionary] = {}

    def get_dictionary(self, lang: str) -> Dictionary:
        """Return the dictionary for ``lang``, creating it when missing."""
        existing = self._library.get(lang)
        if existing is not None:
            return existing
        return self.append_dictionary(lang)

    def clear(self) -> None:
        self._library.clear()

    def get_value(self, lang: str, tag: str) -> str:
        return self.get_dictionary(lang).get_value(tag)

    def append_value(self, lang: str, tag: str, value: str) -> None:
        self.get_dictionary(lang).append_value(tag, value)

    def append_dictionary(self, lang: str) -> Dictionary:
        """Create a dictionary for ``lang``; a registered one is not replaced."""
        dictionary = Dictionary(lang)
        self._library.setdefault(lang, dictionary)
        return dictionary