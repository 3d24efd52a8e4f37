"""Catalog assembly, indexing and lookup."""
from src.catalog.assemblers import (
    DeviceAssembler,
    DirectoryAssembler,
    ExtensionAssembler,
    default_assemblers,
)
from src.catalog.base import BaseAssembler, Document
from src.catalog.index import CatalogIndex, build_index, serialize_document
from src.catalog.router import RouteResult, route

__all__ = [
    "BaseAssembler",
    "Document",
    "DirectoryAssembler",
    "DeviceAssembler",
    "ExtensionAssembler",
    "default_assemblers",
    "CatalogIndex",
    "build_index",
    "serialize_document",
    "RouteResult",
    "route",
]
