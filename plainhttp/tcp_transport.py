import socket

from .errors import (
    TransportError,
    DnsFailureError,
    SocketCreateError,
    SocketConnectError,
    SocketWriteError,
    SocketReadError,
    ConnectionClosedError,
)
from .transport import Transport


class TcpTransport(Transport):
    def __init__(self, timeout: float | None = None) -> None:
        self._timeout = timeout
        self._sock: socket.socket | None = None

    def connect(self, host: str, port: int) -> None:
        if self._sock is not None:
            raise TransportError("Transport is already connected.")

        if not host:
            raise DnsFailureError("Cannot resolve an empty host.")

        if not 0 < port < 65536:
            raise SocketConnectError(f"Port {port} is out of range.")

        try:
            addresses = socket.getaddrinfo(host, port, socket.AF_INET, socket.SOCK_STREAM)
        except (socket.gaierror, ValueError) as e:
            raise DnsFailureError(f"DNS Failure for host '{host}'") from e

        family, sock_type, proto, _, address = addresses[0]

        try:
            sock = socket.socket(family, sock_type, proto)
        except OSError as e:
            raise SocketCreateError(f"Socket creation failed: {e}") from e

        try:
            sock.settimeout(self._timeout)
            sock.connect(address)
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        except OSError as e:
            sock.close()
            raise SocketConnectError(f"Socket connection to {host}:{port} failed: {e}") from e

        self._sock = sock

    def write(self, data: bytes) -> int:
        if self._sock is None:
            raise TransportError("Cannot write on a disconnected transport.")

        try:
            self._sock.sendall(data)
        except OSError as e:
            raise SocketWriteError(f"Socket write failed: {e}") from e
        return len(data)

    def read_into(self, buffer: bytearray) -> int:
        if self._sock is None:
            raise TransportError("Cannot read from a disconnected transport.")

        try:
            return self._sock.recv_into(buffer)
        except ConnectionResetError as e:
            raise ConnectionClosedError(f"Connection reset by peer: {e}") from e
        except OSError as e:
            raise SocketReadError(f"Socket read failed: {e}") from e

    def close(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None
