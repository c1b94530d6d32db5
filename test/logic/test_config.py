import os
from unittest.mock import MagicMock, patch

import pytest
from loguru import logger

from scpicli.types import SessionConfig
from scpicli.util import (
    TerminalState,
    clear_log,
    get_log_filename,
    shutdown_client_log,
    start_client_log,
)


class TestSessionConfig:
    def test_defaults(self):
        config = SessionConfig(host="instrument.local")
        assert config.port == 9001
        assert config.timeout == 5
        assert config.heartbeat_interval == 5
        assert (config.keepalive_idle, config.keepalive_interval) == (4, 1)
        assert config.keepalive_count == 4

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"host": ""}, "Host must not be empty"),
            ({"host": "h", "port": 0}, "Port must be between"),
            ({"host": "h", "port": 65536}, "Port must be between"),
            ({"host": "h", "timeout": 0}, "Query timeout must be positive"),
            ({"host": "h", "heartbeat_interval": -1}, "Heartbeat interval"),
            ({"host": "h", "keepalive_count": 0}, "Keepalive count"),
        ],
    )
    def test_validation(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            SessionConfig(**kwargs)

    def test_keyword_only(self):
        with pytest.raises(TypeError):
            SessionConfig("localhost", 5025)


class TestClientLog:
    def test_file_log(self, tmp_path):
        log_path = tmp_path / "logs" / "client.log"

        start_client_log(log_to_file=True, log_path=str(log_path), log_level="DEBUG")
        logger.debug("hello from the test")
        assert get_log_filename() == str(log_path)
        shutdown_client_log()

        text = log_path.read_text()
        assert "Client log started" in text
        assert "hello from the test" in text

    def test_clear_previous(self, tmp_path):
        log_path = tmp_path / "client.log"
        log_path.write_text("stale\n")

        start_client_log(log_to_file=True, log_path=str(log_path), clear_prev=True)
        shutdown_client_log()

        assert "stale" not in log_path.read_text()

    def test_clear_missing_log(self, tmp_path):
        clear_log(str(tmp_path / "missing.log"))
        assert not os.path.exists(tmp_path / "missing.log")


class TestTerminalState:
    def test_not_a_terminal(self):
        stream = MagicMock()
        stream.isatty.return_value = False
        state = TerminalState(stream)

        assert not state.save()
        assert not state.restore()

    def test_save_and_restore(self):
        stream = MagicMock()
        stream.isatty.return_value = True
        stream.fileno.return_value = 0
        attrs = [0, 0, 0, 0, 0, 0, []]

        with patch("scpicli.util.terminal.termios") as mock_termios:
            mock_termios.error = OSError
            mock_termios.TCSADRAIN = 1
            mock_termios.tcgetattr.return_value = attrs
            state = TerminalState(stream)

            assert state.save()
            assert state.restore()

        mock_termios.tcsetattr.assert_called_once_with(0, 1, attrs)
