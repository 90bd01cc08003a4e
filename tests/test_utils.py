"""
Tests for configuration, file handling, fetching and logging helpers.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest
import requests
from rich.logging import RichHandler

from tern2dts.config import DEFAULT_GLOBALS, GeneratorConfig, load_config
from tern2dts.errors import ConfigError, FetchError
from tern2dts.utils import (
    configure_logging,
    ensure_directory,
    fetch_json,
    fetch_text,
    get_logger,
    load_json,
    save_json,
    save_text,
)
from tern2dts.utils.fetch import is_url


class TestFileHandlers:
    """Tests for file handling utilities."""

    def test_save_and_load_json(self, temp_dir):
        """Test saving and loading JSON."""
        data = {"key": "value", "number": 42, "list": [1, 2, 3]}
        filepath = temp_dir / "test.json"
        save_json(data, filepath)
        assert load_json(filepath) == data

    def test_save_text_creates_parents(self, temp_dir):
        path = save_text("declare var a: number\n", temp_dir / "dist" / "index.d.ts")
        assert path.exists()
        assert path.read_text(encoding="utf-8") == "declare var a: number\n"

    def test_ensure_directory(self, temp_dir):
        """Test directory creation."""
        new_dir = temp_dir / "nested" / "directory"
        result = ensure_directory(new_dir)
        assert result.exists()
        assert result.is_dir()


class TestConfig:
    """Tests for GeneratorConfig and load_config."""

    def test_defaults(self):
        config = load_config()
        assert config.base_url == "https://docs.scriptable.app/"
        assert list(config.globals) == list(DEFAULT_GLOBALS)
        assert "await" in config.reserved_identifiers

    def test_defaults_are_not_shared(self):
        first = GeneratorConfig()
        first.globals["log"]["aliasFor"] = "console.warn"
        assert GeneratorConfig().globals["log"]["aliasFor"] == "console.log"

    def test_overlay(self, temp_dir):
        path = temp_dir / "config.json"
        save_json({"wrap_column": 100, "header": ""}, path)
        config = load_config(path)
        assert config.wrap_column == 100
        assert config.header == ""
        assert config.source == "scriptable.json"

    def test_unknown_keys_are_rejected(self):
        with pytest.raises(ConfigError) as excinfo:
            GeneratorConfig.from_dict({"colour": "red", "base_url": "x"})
        assert "colour" in str(excinfo.value)

    def test_invalid_file(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigError):
            load_config(temp_dir / "missing.json")

    def test_root_must_be_mapping(self, temp_dir):
        path = temp_dir / "config.json"
        save_json(["a"], path)
        with pytest.raises(ConfigError):
            load_config(path)


class TestFetch:
    """Tests for HTTP retrieval."""

    def test_is_url(self):
        assert is_url("https://docs.scriptable.app/scriptable.json")
        assert not is_url("scriptable.json")

    def test_fetch_json_resolves_base_url(self):
        response = MagicMock()
        response.json.return_value = {"a": 1}
        with patch("tern2dts.utils.fetch.requests.get", return_value=response) as get:
            assert fetch_json("scriptable.json", "https://docs.scriptable.app/", 5) == {"a": 1}
        get.assert_called_once_with("https://docs.scriptable.app/scriptable.json", timeout=5)

    def test_fetch_json_invalid_body(self):
        response = MagicMock()
        response.json.side_effect = ValueError("Expecting value")
        with patch("tern2dts.utils.fetch.requests.get", return_value=response):
            with pytest.raises(FetchError):
                fetch_json("https://example.com/doc.json")

    def test_request_error_becomes_fetch_error(self):
        with patch(
            "tern2dts.utils.fetch.requests.get",
            side_effect=requests.ConnectionError("offline"),
        ):
            with pytest.raises(FetchError) as excinfo:
                fetch_text("https://example.com/")
        assert "offline" in str(excinfo.value)

    def test_fetch_text_uses_session(self):
        session = MagicMock()
        session.get.return_value.text = "<html></html>"
        assert fetch_text("https://example.com/", session=session) == "<html></html>"
        session.get.assert_called_once_with("https://example.com/", timeout=15.0)


class TestLogging:
    """Tests for logging setup."""

    def test_get_logger(self):
        assert get_logger().name == "tern2dts"
        assert get_logger("pipeline").name == "tern2dts.pipeline"

    def test_configure_logging(self):
        logger = configure_logging(verbose=True)
        assert logger.level == logging.DEBUG
        assert not logger.propagate
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

    def test_configure_logging_is_idempotent(self):
        configure_logging()
        logger = configure_logging()
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
