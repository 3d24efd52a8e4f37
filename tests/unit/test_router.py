"""Unit tests for catalog request routing."""
from __future__ import annotations

from types import MappingProxyType

import pytest

from src.catalog.index import CatalogIndex
from src.catalog.router import NOT_FOUND, RouteResult, route, strip_locale_suffix


@pytest.fixture
def index() -> CatalogIndex:
    cells = {
        ("devices", "en"): '[{"name":"Arduino Uno"}]',
        ("devices", "zh-cn"): '[{"name":"Arduino Uno 开发板"}]',
        ("extensions", "en"): "[]",
        ("extensions", "zh-cn"): "[]",
    }
    return CatalogIndex(
        catalog_types=("devices", "extensions"),
        locales=("en", "zh-cn"),
        _cells=MappingProxyType(cells),
    )


class TestStripLocaleSuffix:
    @pytest.mark.parametrize(
        "segment,expected",
        [
            ("en.json", "en"),
            ("zh-cn.json", "zh-cn"),
            # Exactly five characters are dropped, whatever they are
            ("en.yaml", "en"),
            ("en.js", ""),
            (".json", ""),
            ("", ""),
        ],
    )
    def test_strips_fixed_length(self, segment, expected):
        assert strip_locale_suffix(segment, 5) == expected

    def test_zero_length_suffix(self):
        assert strip_locale_suffix("en", 0) == "en"


class TestRoute:
    def test_device_hit(self, index):
        result = route(index, "devices", "zh-cn.json")

        assert result == RouteResult(status=200, body='[{"name":"Arduino Uno 开发板"}]')
        assert result.found

    def test_extension_hit(self, index):
        assert route(index, "extensions", "en.json").body == "[]"

    def test_unknown_type(self, index):
        assert route(index, "bogus", "en.json") is NOT_FOUND

    def test_unsupported_locale_has_no_default(self, index):
        result = route(index, "devices", "xx.json")

        assert result.status == 404
        assert result.body is None
        assert not result.found

    def test_locale_without_suffix_is_a_miss(self, index):
        assert route(index, "devices", "en").status == 404

    def test_locale_is_case_sensitive(self, index):
        assert route(index, "devices", "zh-CN.json").status == 404

    def test_custom_suffix_length(self, index):
        assert route(index, "devices", "en.js", suffix_length=3).status == 200
