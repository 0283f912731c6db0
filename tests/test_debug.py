"""Tests for the debug manager."""

import logging

import pytest

from connect4_core.debug import DebugLevel, DebugManager


@pytest.fixture
def manager():
    manager = DebugManager("connect4_core.test_debug")
    manager.configure(level=DebugLevel.TRACE)
    return manager


class TestDebugManager:
    def test_component_filter(self, manager, caplog):
        manager.configure(components=['grid'])
        with caplog.at_level(logging.DEBUG, logger="connect4_core.test_debug"):
            manager.debug("shown", "grid")
            manager.debug("hidden", "ai")
        assert "[grid] shown" in caplog.text
        assert "hidden" not in caplog.text

    def test_level_threshold(self, manager, caplog):
        manager.configure(level=DebugLevel.WARNING)
        with caplog.at_level(logging.DEBUG, logger="connect4_core.test_debug"):
            manager.info("quiet")
            manager.warning("loud")
        assert "quiet" not in caplog.text
        assert "loud" in caplog.text

    def test_none_silences_everything(self, manager, caplog):
        manager.configure(level=DebugLevel.NONE)
        with caplog.at_level(logging.DEBUG, logger="connect4_core.test_debug"):
            manager.error("nothing")
        assert caplog.text == ""

    def test_trace_prefix(self, manager, caplog):
        with caplog.at_level(logging.DEBUG, logger="connect4_core.test_debug"):
            manager.trace("deep", "ai")
        assert "TRACE: [ai] deep" in caplog.text

    def test_timers(self, manager):
        manager.start_timer("search")
        assert manager.end_timer("search") >= 0
        assert manager.end_timer("search") is None

    def test_timed_block_logs_on_error(self, manager, caplog):
        with caplog.at_level(logging.DEBUG, logger="connect4_core.test_debug"):
            with pytest.raises(RuntimeError):
                with manager.timed("failing", "ai"):
                    raise RuntimeError("boom")
        assert "Performance [failing]" in caplog.text
        assert manager.end_timer("failing") is None

    def test_set_from_string(self, manager):
        manager.set_from_string("error")
        assert manager.level == DebugLevel.ERROR
        manager.set_from_string("bogus")
        assert manager.level == DebugLevel.ERROR

    def test_log_file(self, manager, tmp_path):
        path = tmp_path / "core.log"
        manager.configure(log_file=str(path))
        manager.info("to file", "session")
        manager.configure(log_file="")
        assert "[session] to file" in path.read_text()
