"""Translation table loading and per-locale translators."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from pydantic import TypeAdapter, ValidationError

from src.errors import ConfigurationError

_TABLE_ADAPTER = TypeAdapter(dict[str, dict[str, str]])
_PLACEHOLDER = re.compile(r"\{(\w+)\}")

_EMPTY: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True, eq=False)
class TranslationTable:
    """Immutable mapping of locale -> message key -> localized text.

    Source data may be keyed either way round:

        {"en": {"hello": "Hello"}, "zh-cn": {"hello": "你好"}}   # locale-first
        {"hello": {"en": "Hello", "zh-cn": "你好"}}              # key-first

    Both normalize to the locale-first form.
    """

    messages: Mapping[str, Mapping[str, str]]

    def for_locale(self, locale: str) -> Mapping[str, str]:
        """Return the messages for one locale, empty when it has none."""
        return self.messages.get(locale, _EMPTY)

    @property
    def locales(self) -> tuple[str, ...]:
        return tuple(self.messages)

    @classmethod
    def from_mapping(
        cls, data: Any, locales: Iterable[str]
    ) -> TranslationTable:
        """Validate raw data and build a table.

        Raises:
            ConfigurationError: If data is not a two-level mapping of strings
        """
        try:
            validated = _TABLE_ADAPTER.validate_python(data, strict=True)
        except ValidationError as e:
            raise ConfigurationError(
                f"Translations must map strings to string mappings: {e.error_count()} invalid entries"
            ) from e

        supported = set(locales)
        by_locale: dict[str, dict[str, str]] = {}
        if _is_locale_first(validated, supported):
            by_locale = validated
        else:
            for key, texts in validated.items():
                for locale, text in texts.items():
                    by_locale.setdefault(locale, {})[key] = text

        return cls(
            MappingProxyType(
                {locale: MappingProxyType(dict(msgs)) for locale, msgs in by_locale.items()}
            )
        )


def _is_locale_first(data: dict[str, dict[str, str]], supported: set[str]) -> bool:
    """Tell the two translation layouts apart.

    An inner mapping keyed only by supported locales is a key-first entry,
    even when its own key is a locale code ("en": {"en": "English"}).

    Raises:
        ConfigurationError: If the layout cannot be decided
    """
    def keyed_by_locale(texts: dict[str, str]) -> bool:
        return bool(texts) and set(texts) <= supported

    locale_tops = [top for top in data if top in supported]
    if not locale_tops:
        return False

    if len(locale_tops) == len(data):
        if any(keyed_by_locale(texts) for texts in data.values()):
            raise ConfigurationError(
                "Ambiguous translations: top-level keys are locales but entries are keyed by locale too"
            )
        return True

    # Mixed top level: locale-named keys must be ordinary key-first entries
    misplaced = [top for top in locale_tops if not keyed_by_locale(data[top])]
    if misplaced:
        raise ConfigurationError(
            f"Ambiguous translations: {', '.join(misplaced)} look like locale sections in a key-first table"
        )
    return False


def load_translations(path: str | Path, locales: Iterable[str]) -> TranslationTable:
    """Load the translation table from a JSON file.

    Args:
        path: Path to the translations file
        locales: Supported locale codes, used to detect the file's shape

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read translations file {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Translations file {path} is not valid JSON: {e}") from e

    return TranslationTable.from_mapping(data, locales)


@dataclass(frozen=True)
class Translator:
    """Callable resolving message keys for a single locale.

    Lookups never fail: a missing key resolves to ``default`` when given,
    otherwise to the key itself.
    """

    locale: str
    _messages: Mapping[str, str]

    def __call__(
        self,
        key: str,
        default: str | None = None,
        values: Mapping[str, Any] | None = None,
    ) -> str:
        text = self._messages.get(key)
        if text is None:
            text = key if default is None else default
        if values:
            text = _interpolate(text, values)
        return text


def _interpolate(text: str, values: Mapping[str, Any]) -> str:
    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        return str(values[name]) if name in values else match.group(0)

    return _PLACEHOLDER.sub(replace, text)


@lru_cache(maxsize=64)
def _cached_translator(locale: str, table: TranslationTable) -> Translator:
    return Translator(locale=locale, _messages=table.for_locale(locale))


def make_translator(locale: str, table: TranslationTable) -> Translator:
    """Return the translator for ``locale`` bound to ``table``."""
    return _cached_translator(locale, table)
