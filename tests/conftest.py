import socket
import threading
from queue import Queue

import pytest


class ServerFixture:
    """Accepts up to `connections` clients on 127.0.0.1 and hands each to `handler`."""

    def __init__(self, handler, connections=1):
        self._handler = handler
        self._connections = connections
        self._should_stop = threading.Event()
        self.listener_sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.listener_sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.listener_sock.bind(("127.0.0.1", 0))
        self.port = self.listener_sock.getsockname()[1]
        self.thread = threading.Thread(target=self._accept_loop, daemon=True)

    def start(self):
        self.listener_sock.listen()
        self.thread.start()

    def stop(self):
        if not self._should_stop.is_set():
            self._should_stop.set()
            # Connect to unblock the accept() call
            try:
                socket.create_connection(("127.0.0.1", self.port), timeout=0.1).close()
            except OSError:
                pass
            self.thread.join(timeout=2.0)
            self.listener_sock.close()

    def _accept_loop(self):
        for _ in range(self._connections):
            try:
                client_sock, _ = self.listener_sock.accept()
            except OSError:
                return
            with client_sock:
                if self._should_stop.is_set():
                    return
                try:
                    self._handler(client_sock)
                except OSError:
                    pass


def recv_request(sock: socket.socket) -> bytes:
    """Reads one request: the header block plus a Content-Length body, if any."""
    data = bytearray()
    while b"\r\n\r\n" not in data:
        chunk = sock.recv(4096)
        if not chunk:
            return bytes(data)
        data += chunk

    header_end = data.find(b"\r\n\r\n") + 4
    content_length = 0
    for line in data[:header_end].split(b"\r\n")[1:]:
        name, _, value = line.partition(b":")
        if name.strip().lower() == b"content-length":
            content_length = int(value.strip())
            break

    while len(data) < header_end + content_length:
        chunk = sock.recv(4096)
        if not chunk:
            break
        data += chunk
    return bytes(data)


def recv_until_idle(sock: socket.socket, idle: float = 0.2) -> bytes:
    """Reads everything the client sends until it goes quiet for `idle` seconds."""
    data = bytearray()
    sock.settimeout(idle)
    while True:
        try:
            chunk = sock.recv(4096)
        except socket.timeout:
            break
        if not chunk:
            break
        data += chunk
    sock.settimeout(None)
    return bytes(data)


def responder(response: bytes, captured: Queue | None = None):
    """Builds a handler that captures the request and replies with `response`."""
    def handler(client_sock: socket.socket):
        request = recv_request(client_sock)
        if captured is not None:
            captured.put(request)
        client_sock.sendall(response)
    return handler


@pytest.fixture
def server_factory():
    servers = []

    def _factory(handler, connections=1):
        server = ServerFixture(handler, connections)
        server.start()
        servers.append(server)
        return server

    yield _factory

    for server in servers:
        server.stop()


@pytest.fixture
def unused_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
