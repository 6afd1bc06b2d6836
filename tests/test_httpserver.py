from unittest import mock

import pytest

from patients_service.config import ServerConfig
from patients_service.httpserver import HttpServer, HttpServerError


def test_local_env_enables_debug():
    server = HttpServer("local", ServerConfig())
    assert server.app.debug is True


def test_prod_env_disables_debug():
    server = HttpServer("prod", ServerConfig())
    assert server.app.debug is False


def test_run_uses_configured_address():
    server = HttpServer("prod")
    cfg = ServerConfig(host="127.0.0.1", port=9090)
    with mock.patch.object(server.app, "run") as fake_run:
        server.run(cfg)
    kwargs = fake_run.call_args.kwargs
    assert (kwargs["host"], kwargs["port"]) == ("127.0.0.1", 9090)


def test_run_wraps_os_error():
    server = HttpServer("prod")
    with mock.patch.object(server.app, "run", side_effect=OSError("boom")):
        with pytest.raises(HttpServerError) as info:
            server.run(ServerConfig())
    assert str(info.value) == "error http server: boom"


def test_run_wraps_exit():
    server = HttpServer("local")
    with mock.patch.object(server.app, "run", side_effect=SystemExit(1)):
        with pytest.raises(HttpServerError) as info:
            server.run(ServerConfig())
    assert str(info.value).startswith("error http server:")