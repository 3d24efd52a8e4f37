"""Shared test fixtures and configuration."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.config.settings import Settings


def write_json(path: Path, data) -> Path:
    """Write data as UTF-8 JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def translations() -> dict:
    """Return key-first translations as they appear in locales.json."""
    return {
        "hello": {"en": "Hello", "zh-cn": "你好"},
        "arduinoUno.name": {"en": "Arduino Uno", "zh-cn": "Arduino Uno 开发板"},
        "arduinoUno.description": {
            "en": "A beginner friendly board",
            "zh-cn": "适合入门的开发板",
        },
        "microbit.name": {"en": "micro:bit"},
        "servo.name": {"en": "Servo", "zh-cn": "舵机"},
        "servo.blocks": {"en": "{count} blocks", "zh-cn": "{count} 个积木"},
    }


@pytest.fixture
def device_manifests() -> dict[str, dict]:
    """Return device manifests keyed by directory name."""
    return {
        "arduinoUno": {
            "name": {"@message": "arduinoUno.name", "default": "Arduino Uno"},
            "greeting": {"@message": "hello"},
            "description": {"@message": "arduinoUno.description"},
            "iconURL": "arduinoUno.png",
            "connectionIconURL": "https://example.com/usb.svg",
            "tags": ["arduino", {"@message": "hello"}],
            "featured": True,
            "baudRate": 115200,
        },
        "microbit": {
            "deviceId": "microbitV2",
            "name": {"@message": "microbit.name"},
            "helpLink": None,
        },
    }


@pytest.fixture
def extension_manifests() -> dict[str, dict]:
    """Return extension manifests keyed by directory name."""
    return {
        "servo": {
            "name": {"@message": "servo.name"},
            "summary": {"@message": "servo.blocks", "values": {"count": 3}},
            "iconURL": "servo.svg",
            "blockIconURL": "/static/blocks/servo.svg",
        },
    }


@pytest.fixture
def user_data_dir(
    tmp_path: Path,
    translations: dict,
    device_manifests: dict[str, dict],
    extension_manifests: dict[str, dict],
) -> Path:
    """Build a complete user-data directory in tmp_path."""
    root = tmp_path / "user-data"
    write_json(root / "locales.json", translations)
    for name, manifest in device_manifests.items():
        write_json(root / "devices" / name / "index.json", manifest)
    for name, manifest in extension_manifests.items():
        write_json(root / "extensions" / name / "index.json", manifest)

    (root / "devices" / "arduinoUno" / "arduinoUno.png").write_bytes(b"\x89PNG fake")
    (root / "devices" / "readme.txt").write_text("device notes", encoding="utf-8")
    (root / "devices" / "drafts").mkdir()
    return root


@pytest.fixture
def test_settings() -> Settings:
    """Return settings bound to loopback with the default locales."""
    settings = Settings()
    settings.server.host = "127.0.0.1"
    settings.server.index_workers = 1
    return settings
