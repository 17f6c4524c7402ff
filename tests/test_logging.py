"""Tests for namespaced loggers and the debug records attribute handling emits."""

import logging

import pytest

from llaves import Markdown, parse
from llaves.errors import PluginError
from llaves.utils.logger import get_logger


class TestGetLogger:
    def test_prefix_added(self) -> None:
        assert get_logger("mymodule").name == "llaves.mymodule"

    def test_package_names_unchanged(self) -> None:
        assert get_logger("llaves.attributes.scope").name == "llaves.attributes.scope"
        assert get_logger("llaves").name == "llaves"

    def test_similar_prefix_still_namespaced(self) -> None:
        assert get_logger("llavesx").name == "llaves.llavesx"


class TestDebugRecords:
    """Silent fallbacks leave a DEBUG record behind."""

    def test_dropped_attribute(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="llaves"):
            parse('*a*{onclick="x()"}')
        assert any(
            r.name == "llaves.attributes.scope" and "onclick" in r.getMessage()
            for r in caplog.records
        )

    def test_inline_fallback(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="llaves"):
            parse("word{.c}")
        messages = [r.getMessage() for r in caplog.records if r.name == "llaves.attributes.resolver"]
        assert any("{.c}" in m for m in messages)

    def test_block_fallback(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="llaves"):
            parse("{.c}")
        assert any(
            r.name == "llaves.attributes.resolver" and "block" in r.getMessage()
            for r in caplog.records
        )

    def test_unknown_plugin(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="llaves"), pytest.raises(PluginError):
            Markdown(plugins=["mermaid"])
        assert any("mermaid" in r.getMessage() for r in caplog.records)

    def test_nothing_above_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="llaves"):
            parse('# T {#t onclick="x"}\n\nword{.c}\n\n{.orphan}')
        assert caplog.records
        assert all(r.levelno == logging.DEBUG for r in caplog.records)
