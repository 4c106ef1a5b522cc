"""
Tests for command line parsing, logging setup and shutdown statistics.
"""

import logging
from pathlib import Path

import pytest
from unittest.mock import MagicMock

from src.keymap import ControllerKeymap, build_controller_input
from src.main import ServiceConfig, collect_stats, parse_args, setup_logging
from src.osc import build_osc_bundle
from src.udp_listener import UDPListener


class TestParseArgs:
    """Test option parsing."""

    def test_defaults(self):
        config = parse_args([])
        assert config == ServiceConfig()
        assert config.host == "0.0.0.0"
        assert config.port == 39600
        assert config.dry_run is False
        assert config.log_file is None
        assert config.log_level == "INFO"

    def test_all_options(self):
        config = parse_args([
            "--host=127.0.0.1",
            "--port=40000",
            "--dry-run",
            "--log-file=logs/keymap.log",
            "--log-level=debug",
        ])
        assert config.host == "127.0.0.1"
        assert config.port == 40000
        assert config.dry_run is True
        assert config.log_file == Path("logs/keymap.log")
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("argv", [
        ["--port=abc"],
        ["--port=70000"],
        ["--log-level=LOUD"],
        ["--verbose"],
    ])
    def test_invalid_options(self, argv):
        with pytest.raises(ValueError):
            parse_args(argv)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)


def test_setup_logging_console_only(restore_root_logger):
    root = setup_logging(level="WARNING")
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1


def test_setup_logging_with_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "nested" / "keymap.log"
    root = setup_logging(log_file=log_file, level="DEBUG")

    assert len(root.handlers) == 2
    logging.getLogger("src.test").debug("hello from test")
    for handler in root.handlers:
        handler.flush()

    assert log_file.exists()
    assert "hello from test" in log_file.read_text()


def test_collect_stats_includes_presses_from_failed_packets():
    keymap = ControllerKeymap(MagicMock())
    listener = UDPListener(packet_handler=keymap.handle_packet)

    malformed = b"/bad\x00\x00\x00\x00xx\x00\x00"
    listener.process_packet(build_osc_bundle(1, build_controller_input("ClickAbutton"), malformed))

    stats = collect_stats(listener, keymap)
    assert stats["actions_triggered"] == 1
    assert stats["parse_errors"] == 1
    assert stats["handler_errors"] == 0
