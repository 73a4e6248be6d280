"""TCP echo server that multiplexes its clients with ``select()``."""

from __future__ import annotations

import select
import socket

SERVER_PORT = 8099
MAX_CLIENTS = 10
BUFFER_SIZE = 1024
LISTEN_BACKLOG = 5


class SelectTcpServer:
    """Level-triggered echo server with a fixed number of client slots.

    Clients beyond ``max_clients`` are accepted and closed at once.
    """

    def __init__(self, host="", port=SERVER_PORT, max_clients=MAX_CLIENTS):
        if max_clients < 1:
            raise ValueError("max_clients must be at least 1")
        print("Select tcp server")
        self._slots: list[socket.socket | None] = [None] * max_clients
        self._listening = False
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, port))
        except OSError:
            sock.close()
            raise
        self._server: socket.socket | None = sock

    @property
    def address(self):
        """The (host, port) the listening socket is bound to."""
        if self._server is None:
            raise RuntimeError("server is closed")
        return self._server.getsockname()

    def start(self):
        """Begin listening for connections."""
        if self._server is None:
            raise RuntimeError("server is closed")
        self._server.listen(LISTEN_BACKLOG)
        self._listening = True
        print(f"Select Server listening on port {self.address[1]}...")

    def serve_once(self, timeout=None):
        """Wait for one round of events and handle them.

        Returns the number of sockets that were ready; 0 on timeout.
        """
        if not self._listening or self._server is None:
            raise RuntimeError("server is not listening; call start() first")
        watched = [self._server, *(c for c in self._slots if c is not None)]
        try:
            readable, _, _ = select.select(watched, [], [], timeout)
        except OSError as exc:
            print(f"select: {exc}")
            return 0
        ready = set(readable)
        if self._server in ready:
            self._accept()
        self._serve_clients(ready)
        return len(readable)

    def serve_forever(self):
        """Listen if not yet listening, then handle events until interrupted."""
        if not self._listening:
            self.start()
        while True:
            self.serve_once()

    def close(self):
        """Close every client connection and the listening socket."""
        for index, client in enumerate(self._slots):
            if client is not None:
                client.close()
                self._slots[index] = None
        if self._server is not None:
            self._server.close()
            self._server = None
        self._listening = False

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def _accept(self):
        try:
            client, (ip, port) = self._server.accept()
        except OSError as exc:
            print(f"accept: {exc}")
            return
        for index, slot in enumerate(self._slots):
            if slot is None:
                self._slots[index] = client
                print(f"New client connected: fd={client.fileno()}, IP={ip}:{port}")
                return
        client.close()
        print("Reject connection: Client list full")

    def _serve_clients(self, ready):
        for index, client in enumerate(self._slots):
            if client is None or client not in ready:
                continue
            fd = client.fileno()
            try:
                data = client.recv(BUFFER_SIZE - 1)
            except OSError:
                data = b""
            if not data:
                client.close()
                self._slots[index] = None
                print(f"Client fd={fd} disconnected")
                continue
            print(f"Received from fd={fd}: {data.decode(errors='replace')}", end="")
            try:
                client.sendall(data)
            except OSError as exc:
                print(f"write: {exc}")