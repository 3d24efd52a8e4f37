"""Translation support for catalog assembly."""
from src.i18n.translator import (
    TranslationTable,
    Translator,
    load_translations,
    make_translator,
)

__all__ = [
    "TranslationTable",
    "Translator",
    "load_translations",
    "make_translator",
]
