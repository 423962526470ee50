"""
Unit tests for hoinprint/__init__.py
Covers version metadata, the public API, logging setup and configuration loading.
"""

import json
import logging
import logging.handlers
import re
from pathlib import Path
from typing import Iterator
from unittest import mock

import pytest

import hoinprint


@pytest.fixture
def bare_root_logger() -> Iterator[logging.Logger]:
    """Detach the package handlers for the duration of a test."""
    root_logger = logging.getLogger(hoinprint.ROOT_LOGGER_NAME)
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level
    for handler in saved_handlers:
        root_logger.removeHandler(handler)

    yield root_logger

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(saved_level)


class TestVersionMetadata:
    def test_version_format(self) -> None:
        assert re.match(r"^\d+\.\d+\.\d+$", hoinprint.__version__)

    def test_version_components(self) -> None:
        expected = f"{hoinprint.VERSION_MAJOR}.{hoinprint.VERSION_MINOR}.{hoinprint.VERSION_PATCH}"
        assert hoinprint.__version__ == expected

    def test_metadata_attributes(self) -> None:
        for name in ("__author__", "__description__", "__license__", "__python_requires__"):
            value = getattr(hoinprint, name)
            assert isinstance(value, str) and value, f"{name} must be a non-empty string"


class TestPublicAPI:
    def test_all_exports_exist(self) -> None:
        for name in hoinprint.__all__:
            assert hasattr(hoinprint, name), f"'{name}' from __all__ does not exist"

    def test_no_duplicate_exports(self) -> None:
        assert len(hoinprint.__all__) == len(set(hoinprint.__all__))

    def test_session_exported(self) -> None:
        for name in ("Printer", "open_printer", "HealingTransport", "RedialError", "rasterize"):
            assert name in hoinprint.__all__


class TestLogging:
    def test_get_logger_prefixes_name(self) -> None:
        assert hoinprint.get_logger("test_module").name == "hoinprint.test_module"

    def test_get_logger_with_qualified_name(self) -> None:
        assert hoinprint.get_logger("hoinprint.printer").name == "hoinprint.printer"

    def test_get_logger_with_main(self) -> None:
        assert hoinprint.get_logger("__main__").name == "hoinprint.main"

    def test_get_logger_with_dots(self) -> None:
        assert hoinprint.get_logger(".escpos.raster").name == "hoinprint.escpos.raster"

    def test_package_logger_is_configured(self) -> None:
        assert logging.getLogger("hoinprint").handlers

    def test_log_level_from_environment(self, bare_root_logger: logging.Logger) -> None:
        with mock.patch.dict("os.environ", {"HOINPRINT_LOG_LEVEL": "debug"}, clear=False):
            hoinprint._setup_logging()

        assert bare_root_logger.level == logging.DEBUG
        assert len(bare_root_logger.handlers) == 1

    def test_unknown_level_falls_back_to_info(self, bare_root_logger: logging.Logger) -> None:
        with mock.patch.dict("os.environ", {"HOINPRINT_LOG_LEVEL": "LOUD"}):
            hoinprint._setup_logging()

        assert bare_root_logger.level == logging.INFO

    def test_file_handler_is_opt_in(self, bare_root_logger: logging.Logger, tmp_path: Path) -> None:
        log_dir = tmp_path / "logs"
        with mock.patch.dict("os.environ", {"HOINPRINT_LOG_DIR": str(log_dir)}):
            hoinprint._setup_logging()

        file_handlers = [
            h for h in bare_root_logger.handlers if isinstance(h, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert log_dir.is_dir()

    def test_setup_is_idempotent(self, bare_root_logger: logging.Logger) -> None:
        hoinprint._setup_logging()
        hoinprint._setup_logging()
        assert len(bare_root_logger.handlers) == 1


class TestConfiguration:
    def test_defaults_when_file_missing(self, tmp_path: Path) -> None:
        config = hoinprint.load_config(tmp_path / "missing.json")

        assert config["address"] == "192.168.1.23:9100"
        assert config["device"] is None
        assert config["port"] == 9100
        assert config["encoding"] == "cp437"
        assert config["image_pacing"] is True
        assert config["tab_width"] == 4

    def test_defaults_are_copied(self, tmp_path: Path) -> None:
        config = hoinprint.load_config(tmp_path / "missing.json")
        config["tab_width"] = 99
        assert hoinprint.load_config(tmp_path / "missing.json")["tab_width"] == 4

    def test_merge_with_defaults(self, tmp_path: Path) -> None:
        config_path = tmp_path / "hoinprint.json"
        config_path.write_text(json.dumps({"address": "10.0.0.7", "custom_key": 1}), encoding="utf-8")

        config = hoinprint.load_config(config_path)

        assert config["address"] == "10.0.0.7"
        assert config["custom_key"] == 1
        assert config["encoding"] == "cp437"

    def test_invalid_json(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        config_path = tmp_path / "hoinprint.json"
        config_path.write_text("{invalid json", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="hoinprint"):
            config = hoinprint.load_config(config_path)

        assert config["address"] == "192.168.1.23:9100"
        assert "invalid JSON" in caplog.text

    def test_non_object_json(self, tmp_path: Path) -> None:
        config_path = tmp_path / "hoinprint.json"
        config_path.write_text(json.dumps(["not", "an", "object"]), encoding="utf-8")

        config = hoinprint.load_config(config_path)

        assert config["tab_width"] == 4
        assert "not" not in config

    def test_unreadable_path(self, tmp_path: Path) -> None:
        config = hoinprint.load_config(tmp_path)
        assert config["port"] == 9100
