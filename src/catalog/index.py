"""Precomputed (catalog type, locale) -> JSON text index."""
from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from src.catalog.base import BaseAssembler, Document
from src.errors import AssemblyError, ConfigurationError
from src.i18n.translator import TranslationTable, make_translator

logger = logging.getLogger(__name__)


def serialize_document(document: Document) -> str:
    """Serialize a Document to compact JSON text.

    Key order is preserved and non-ASCII text is kept as-is, so identical
    Documents always produce identical text.
    """
    return json.dumps(
        document,
        ensure_ascii=False,
        separators=(",", ":"),
        allow_nan=False,
    )


@dataclass(frozen=True)
class CatalogIndex:
    """Immutable mapping of (catalog type, locale) to serialized Documents.

    Built once by build_index() and shared read-only by every request.
    """

    catalog_types: tuple[str, ...]
    locales: tuple[str, ...]
    _cells: Mapping[tuple[str, str], str]

    def get(self, catalog_type: str, locale: str) -> str | None:
        """Return the JSON text for a cell, or None when there is none."""
        return self._cells.get((catalog_type, locale))

    def __contains__(self, key: object) -> bool:
        return key in self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def items(self) -> Iterable[tuple[tuple[str, str], str]]:
        """Iterate cells in (locale, catalog type) build order."""
        return self._cells.items()


def _build_cell(
    base_path: Path,
    assembler: BaseAssembler,
    locale: str,
    translations: TranslationTable,
) -> str:
    translator = make_translator(locale, translations)
    try:
        document = assembler.assemble_data(base_path, translator)
    except AssemblyError:
        raise
    except Exception as e:
        raise AssemblyError(assembler.type, locale, str(e) or type(e).__name__) from e

    try:
        text = serialize_document(document)
    except (TypeError, ValueError) as e:
        raise AssemblyError(assembler.type, locale, f"document is not JSON-serializable: {e}") from e

    logger.debug("Built %s/%s (%d bytes)", assembler.type, locale, len(text))
    return text


def build_index(
    base_path: str | Path,
    assemblers: Sequence[BaseAssembler],
    locales: Sequence[str],
    translations: TranslationTable,
    max_workers: int = 1,
) -> CatalogIndex:
    """Assemble and serialize every (catalog type, locale) cell.

    Args:
        base_path: User-data directory handed to each assembler
        assemblers: One assembler per catalog type
        locales: Supported locale codes
        translations: Translation table shared by all locales
        max_workers: Build cells on a thread pool when greater than 1

    Returns:
        Complete CatalogIndex

    Raises:
        ConfigurationError: If assemblers or locales are empty or duplicated
        AssemblyError: If any cell fails; no partial index is returned
    """
    base_path = Path(base_path)
    types = tuple(a.type for a in assemblers)
    locales = tuple(locales)

    if not types:
        raise ConfigurationError("At least one catalog assembler is required")
    if not locales:
        raise ConfigurationError("At least one supported locale is required")
    if len(set(types)) != len(types):
        raise ConfigurationError(f"Duplicate catalog types: {', '.join(types)}")
    if len(set(locales)) != len(locales):
        raise ConfigurationError(f"Duplicate locales: {', '.join(locales)}")

    keys = [(assembler, locale) for locale in locales for assembler in assemblers]
    started = time.perf_counter()

    if max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(_build_cell, base_path, assembler, locale, translations)
                for assembler, locale in keys
            ]
            # result() re-raises the first failure; the executor is drained on exit
            texts = [future.result() for future in futures]
    else:
        texts = [
            _build_cell(base_path, assembler, locale, translations)
            for assembler, locale in keys
        ]

    cells = {
        (assembler.type, locale): text
        for (assembler, locale), text in zip(keys, texts)
    }
    logger.info(
        "Catalog index ready: %d catalogs x %d locales in %.2fs",
        len(types),
        len(locales),
        time.perf_counter() - started,
    )
    return CatalogIndex(
        catalog_types=types,
        locales=locales,
        _cells=MappingProxyType(cells),
    )
