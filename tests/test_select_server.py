import socket

import pytest

from echoplex.select_server import BUFFER_SIZE, SelectTcpServer


@pytest.fixture
def server():
    srv = SelectTcpServer("127.0.0.1", 0, 2)
    srv.start()
    yield srv
    srv.close()


def _connect(srv):
    client = socket.create_connection(srv.address, timeout=2)
    return client


def test_echo_round_trip(server, capsys):
    client = _connect(server)
    try:
        assert server.serve_once(2) >= 1
        client.sendall(b"hello\n")
        server.serve_once(2)
        assert client.recv(BUFFER_SIZE) == b"hello\n"
    finally:
        client.close()
    out = capsys.readouterr().out
    assert "New client connected" in out
    assert "hello\n" in out


def test_large_message_echoed_over_several_rounds(server):
    payload = bytes(range(256)) * 12
    client = _connect(server)
    try:
        server.serve_once(2)
        client.sendall(payload)
        received = b""
        for _ in range(20):
            if len(received) >= len(payload):
                break
            server.serve_once(0.5)
            client.settimeout(0.5)
            try:
                received += client.recv(len(payload))
            except socket.timeout:
                pass
        assert received == payload
    finally:
        client.close()


def test_rejects_clients_when_full(server, capsys):
    first = _connect(server)
    second = _connect(server)
    third = _connect(server)
    try:
        for _ in range(3):
            server.serve_once(1)
        assert third.recv(16) == b""
    finally:
        for c in (first, second, third):
            c.close()
    assert "Reject connection: Client list full" in capsys.readouterr().out


def test_disconnect_frees_slot(server, capsys):
    clients = [_connect(server) for _ in range(2)]
    for _ in clients:
        server.serve_once(1)
    clients[0].close()
    server.serve_once(2)
    assert "disconnected" in capsys.readouterr().out
    newcomer = _connect(server)
    try:
        server.serve_once(2)
        newcomer.sendall(b"again")
        server.serve_once(2)
        assert newcomer.recv(BUFFER_SIZE) == b"again"
    finally:
        newcomer.close()
        clients[1].close()


def test_timeout_without_activity(server):
    assert server.serve_once(0.05) == 0


def test_serve_before_start_raises():
    with SelectTcpServer("127.0.0.1", 0) as srv:
        with pytest.raises(RuntimeError):
            srv.serve_once(0)


def test_invalid_max_clients():
    with pytest.raises(ValueError):
        SelectTcpServer("127.0.0.1", 0, 0)


def test_port_in_use_raises(server):
    with pytest.raises(OSError):
        SelectTcpServer("127.0.0.1", server.address[1])


def test_closed_server_refuses_service():
    srv = SelectTcpServer("127.0.0.1", 0)
    srv.start()
    srv.close()
    with pytest.raises(RuntimeError):
        srv.serve_once(0)