import socket

import pytest

from echoplex.cli import main


def test_default_singleton_is_eager(capsys):
    assert main(["singleton"]) == 0
    assert capsys.readouterr().out == "Hello world,I`m eager.\n"


def test_lazy_singleton(capsys):
    assert main(["singleton", "--kind", "lazy"]) == 0
    assert capsys.readouterr().out == "Hello world,I`m lazy.\n"


@pytest.mark.parametrize("mode", ["epoll", "select"])
def test_serve_fails_when_port_taken(mode, capsys):
    blocker = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        blocker.bind(("127.0.0.1", 0))
        blocker.listen(1)
        port = blocker.getsockname()[1]
        status = main(["serve", "--mode", mode, "--host", "127.0.0.1", "--port", str(port)])
    finally:
        blocker.close()
    assert status == 1
    assert "echoplex:" in capsys.readouterr().err


def test_invalid_max_clients_fails(capsys):
    status = main(["serve", "--mode", "select", "--host", "127.0.0.1", "--port", "0", "--max-clients", "0"])
    assert status == 1
    assert "max_clients" in capsys.readouterr().err


def test_unknown_mode_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["serve", "--mode", "poll"])
    assert excinfo.value.code == 2


def test_missing_command_is_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2