"""Base classes for catalog assemblers."""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Union

from src.i18n.translator import Translator

# Any JSON-serializable tree
Document = Union[dict[str, Any], list[Any], str, int, float, bool, None]


class BaseAssembler(ABC):
    """Abstract base class for catalog assemblers.

    Subclasses must implement:
    - type: Stable catalog tag, also used as the URL segment
    - assemble_data(): Build the localized Document for one translator

    Assemblers are called once per supported locale, possibly from several
    threads, so assemble_data() must not mutate shared state.
    """

    @property
    @abstractmethod
    def type(self) -> str:
        """Catalog tag, e.g. "devices"."""
        pass

    @abstractmethod
    def assemble_data(self, base_path: Path, translator: Translator) -> Document:
        """Scan base_path and return the catalog localized with translator.

        Args:
            base_path: User-data directory
            translator: Translator for the target locale

        Returns:
            JSON-serializable Document
        """
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}: {self.type}>"
