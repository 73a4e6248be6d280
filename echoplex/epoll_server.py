"""TCP echo server driven by edge-triggered epoll."""

from __future__ import annotations

import contextlib
import select
import socket

SERVER_PORT = 8099
MAX_EVENTS = 64
BUFFER_SIZE = 1024


class EpollTcpServer:
    """Echo server that watches non-blocking clients with edge-triggered epoll."""

    def __init__(self, host="", port=SERVER_PORT):
        print("Epoll tcp server")
        self._clients: dict[int, socket.socket] = {}
        self._epoll: select.epoll | None = None
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
        """Listen and register the listening socket with a new epoll instance."""
        if self._server is None:
            raise RuntimeError("server is closed")
        self._server.listen(socket.SOMAXCONN)
        print(f"Server listening on port {self.address[1]}...")
        self._epoll = select.epoll()
        self._epoll.register(self._server.fileno(), select.EPOLLIN)

    def serve_once(self, timeout=None):
        """Wait for ready events and handle them; returns how many there were."""
        if self._epoll is None or self._server is None:
            raise RuntimeError("server is not listening; call start() first")
        events = self._epoll.poll(-1 if timeout is None else timeout, MAX_EVENTS)
        server_fd = self._server.fileno()
        for fd, _mask in events:
            if fd == server_fd:
                self._accept()
            else:
                self._handle_client(fd)
        return len(events)

    def serve_forever(self):
        """Handle events until waiting for them fails."""
        if self._epoll is None:
            self.start()
        while True:
            try:
                self.serve_once()
            except OSError as exc:
                print(f"epoll_wait: {exc}")
                return

    def close(self):
        """Close all clients, the epoll instance and the listening socket."""
        for client in self._clients.values():
            client.close()
        self._clients.clear()
        was_open = self._server is not None or self._epoll is not None
        if self._server is not None:
            self._server.close()
            self._server = None
        if self._epoll is not None:
            self._epoll.close()
            self._epoll = None
        if was_open:
            print("Server shutdown")

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
        client.setblocking(False)
        fd = client.fileno()
        try:
            self._epoll.register(fd, select.EPOLLIN | select.EPOLLET)
        except OSError as exc:
            print(f"epoll_ctl: client_fd: {exc}")
            client.close()
            return
        self._clients[fd] = client
        print(f"New client connected: {ip}:{port} (fd={fd})")

    def _drop(self, fd):
        with contextlib.suppress(OSError):
            self._epoll.unregister(fd)
        client = self._clients.pop(fd, None)
        if client is not None:
            client.close()

    def _handle_client(self, fd):
        client = self._clients.get(fd)
        if client is None:
            return
        # Edge-triggered: drain everything the kernel holds for this socket.
        while True:
            try:
                data = client.recv(BUFFER_SIZE - 1)
            except BlockingIOError:
                break
            except OSError as exc:
                print(f"read: {exc}")
                self._drop(fd)
                break
            if not data:
                print(f"Client fd={fd} disconnected")
                self._drop(fd)
                break
            print(f"Received from fd={fd}: {data.decode(errors='replace')}", end="")
            with contextlib.suppress(OSError):
                client.send(data)