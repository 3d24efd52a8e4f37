"""Directory-based device and extension assemblers.

Each catalog lives in a sub-directory of the user-data path named after its
tag. Every entry is a directory holding an ``index.json`` manifest:

    devices/
        arduinoUno/
            index.json
            icon.png

Translatable text inside a manifest is written as a message reference,
which is replaced by the translated string:

    {"name": {"@message": "arduinoUno.name", "default": "Arduino Uno"}}
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from src.catalog.base import BaseAssembler, Document
from src.errors import AssemblyError
from src.i18n.translator import Translator

logger = logging.getLogger(__name__)

MESSAGE_KEY = "@message"
MANIFEST_NAME = "index.json"

_ABSOLUTE_PREFIXES = ("http://", "https://", "data:", "/")


def localize(node: Any, translator: Translator) -> Any:
    """Return a copy of node with every message reference translated."""
    if isinstance(node, dict):
        if MESSAGE_KEY in node:
            values = node.get("values")
            return translator(
                str(node[MESSAGE_KEY]),
                default=node.get("default"),
                values=values if isinstance(values, dict) else None,
            )
        return {key: localize(value, translator) for key, value in node.items()}
    if isinstance(node, list):
        return [localize(item, translator) for item in node]
    return node


class DirectoryAssembler(BaseAssembler):
    """Assembler scanning ``<base_path>/<type>/*/index.json``."""

    catalog_type: str = ""
    id_field: str = "id"
    asset_fields: tuple[str, ...] = ("iconURL",)

    @property
    def type(self) -> str:
        return self.catalog_type

    def assemble_data(self, base_path: Path, translator: Translator) -> Document:
        root = Path(base_path) / self.type
        if not root.is_dir():
            logger.debug("No %s directory under %s", self.type, base_path)
            return []

        records = []
        for entry in sorted(p for p in root.iterdir() if p.is_dir()):
            manifest = entry / MANIFEST_NAME
            if not manifest.is_file():
                logger.debug("Skipping %s: no %s", entry, MANIFEST_NAME)
                continue
            raw = self._read_manifest(manifest, translator.locale)
            record = {key: localize(value, translator) for key, value in raw.items()}
            records.append(self._finalize(record, entry.name))
        return records

    def _read_manifest(self, manifest: Path, locale: str) -> dict[str, Any]:
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise AssemblyError(self.type, locale, f"{manifest}: {e}") from e

        if not isinstance(data, dict):
            raise AssemblyError(
                self.type, locale, f"{manifest}: manifest must be a JSON object"
            )
        return data

    def _finalize(self, record: dict[str, Any], entry_name: str) -> dict[str, Any]:
        record.setdefault(self.id_field, entry_name)
        for field_name in self.asset_fields:
            value = record.get(field_name)
            # Relative asset paths are rewritten so the static file server finds them
            if isinstance(value, str) and value and not value.startswith(_ABSOLUTE_PREFIXES):
                record[field_name] = f"{self.type}/{entry_name}/{value}"
        return record


class DeviceAssembler(DirectoryAssembler):
    """Hardware device catalog."""

    catalog_type = "devices"
    id_field = "deviceId"
    asset_fields = ("iconURL", "connectionIconURL", "connectionSmallIconURL")


class ExtensionAssembler(DirectoryAssembler):
    """Block extension catalog."""

    catalog_type = "extensions"
    id_field = "extensionId"
    asset_fields = ("iconURL", "blockIconURL")


def default_assemblers() -> list[BaseAssembler]:
    """Return the assemblers served by default."""
    return [DeviceAssembler(), ExtensionAssembler()]
