"""Tests for the command line entrypoint."""
from unittest.mock import MagicMock, patch

import pytest

from metrics_pusher import main as entrypoint


class TestMain:
    """Tests for main()."""

    def test_parser_defaults_from_env(self, monkeypatch):
        """Test: config path and worker count default from the environment."""
        monkeypatch.setenv("PUSHER_CONFIG", "/tmp/pusher.d")
        monkeypatch.setenv("PUSHER_MAX_WORKERS", "4")

        args = entrypoint.build_parser().parse_args([])

        assert args.config == "/tmp/pusher.d"
        assert args.max_workers == 4

    def test_missing_port_exits_before_scheduling(self, write_config):
        """Test: a fatal config error exits with status 1 and never runs the loop."""
        path = write_config('[node]\nhost = "db"\n')

        with patch.object(entrypoint.PusherRuntime, "run_forever") as run_forever:
            with pytest.raises(SystemExit) as exc_info:
                entrypoint.main(["--config", str(path), "--instance", "host-1"])

        assert exc_info.value.code == 1
        run_forever.assert_not_called()

    def test_runs_until_interrupted(self, write_config, monkeypatch):
        """Test: KeyboardInterrupt stops the runtime cleanly."""
        monkeypatch.delenv("HEALTH_HOST", raising=False)
        monkeypatch.delenv("HEALTH_PORT", raising=False)
        path = write_config("[node]\nport = 9100\n")

        with patch.object(entrypoint.PusherRuntime, "run_forever", side_effect=KeyboardInterrupt), \
                patch.object(entrypoint.PusherRuntime, "stop") as stop:
            entrypoint.main(["--config", str(path), "--instance", "host-1"])

        stop.assert_called_once()

    @pytest.mark.parametrize("value", ["0", "-3", "many"])
    def test_rejects_bad_worker_count(self, value, capsys):
        """Test: --max-workers must be a positive integer."""
        with pytest.raises(SystemExit) as exc_info:
            entrypoint.build_parser().parse_args(["--max-workers", value])

        assert exc_info.value.code == 2
        assert "positive integer" in capsys.readouterr().err

    def test_rejects_bad_worker_count_from_env(self, monkeypatch, capsys):
        """Test: a malformed PUSHER_MAX_WORKERS is a usage error, not a traceback."""
        monkeypatch.setenv("PUSHER_MAX_WORKERS", "lots")

        with pytest.raises(SystemExit) as exc_info:
            entrypoint.build_parser().parse_args([])

        assert exc_info.value.code == 2
        assert "positive integer" in capsys.readouterr().err

    def test_health_server_closed_on_exit(self, write_config):
        """Test: the health server is shut down and its socket closed."""
        path = write_config("[node]\nport = 9100\n")
        server = MagicMock()

        with patch.object(entrypoint, "_start_health_server", return_value=server), \
                patch.object(entrypoint.PusherRuntime, "run_forever", side_effect=KeyboardInterrupt), \
                patch.object(entrypoint.PusherRuntime, "stop"):
            entrypoint.main(["--config", str(path), "--instance", "host-1"])

        server.shutdown.assert_called_once()
        server.server_close.assert_called_once()
