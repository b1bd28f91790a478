# Tests for the CLI entry point and server startup.
# Created: 2026-10-19

import socket
from unittest.mock import MagicMock, patch

import pytest

from indexserve.__main__ import build_parser, main
from indexserve.config import Settings
from indexserve.errors import StartupError
from indexserve.server import _bind_socket, run_server


@pytest.fixture(autouse=True)
def _no_logging_setup():
    with patch("indexserve.__main__.setup_logging"):
        yield


class TestParser:
    def test_no_flags_needed(self):
        args = build_parser().parse_args([])
        assert args.host is None
        assert args.port is None
        assert args.root is None
        assert args.sort is None

    def test_overrides(self):
        args = build_parser().parse_args(["--port", "8080", "--sort", "--root", "/srv"])
        assert args.port == 8080
        assert args.sort is True
        assert args.root == "/srv"


class TestMain:
    def test_runs_server_with_settings(self, tmp_path):
        with patch("indexserve.server.run_server") as mock_run:
            main(["--root", str(tmp_path), "--port", "4000"])
        settings = mock_run.call_args.args[0]
        assert settings.root == tmp_path.resolve()
        assert settings.port == 4000

    def test_invalid_root_exits_1(self, tmp_path):
        with patch("indexserve.server.run_server") as mock_run:
            with pytest.raises(SystemExit) as excinfo:
                main(["--root", str(tmp_path / "missing")])
        assert excinfo.value.code == 1
        mock_run.assert_not_called()

    def test_startup_error_exits_1(self, tmp_path):
        with patch("indexserve.server.run_server", side_effect=StartupError("port in use")):
            with pytest.raises(SystemExit) as excinfo:
                main(["--root", str(tmp_path)])
        assert excinfo.value.code == 1


class TestStartup:
    def test_bind_failure_raises_startup_error(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
            busy.bind(("127.0.0.1", 0))
            busy.listen()
            port = busy.getsockname()[1]
            with pytest.raises(StartupError):
                _bind_socket("127.0.0.1", port)

    def test_run_server_uses_prebound_socket(self, tmp_path):
        settings = Settings(root=tmp_path, host="127.0.0.1", port=3000)
        fake_sock = MagicMock()
        with (
            patch("indexserve.server._bind_socket", return_value=fake_sock) as mock_bind,
            patch("indexserve.server.uvicorn.Server") as mock_server,
        ):
            run_server(settings)
        mock_bind.assert_called_once_with("127.0.0.1", 3000)
        mock_server.return_value.run.assert_called_once_with(sockets=[fake_sock])
        config = mock_server.call_args.args[0]
        assert config.access_log is False
