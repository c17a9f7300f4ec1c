from typing import Callable, Protocol


class Transport(Protocol):
    """
    A single-use, blocking byte stream to a remote host.

    Implementations raise a TransportError subclass for every failure, and
    read_into returns 0 once the peer has closed the stream. close() must be
    safe to call more than once and on a transport that never connected.
    """

    def connect(self, host: str, port: int) -> None:
        ...

    def write(self, data: bytes) -> int:
        ...

    def read_into(self, buffer: bytearray) -> int:
        ...

    def close(self) -> None:
        ...


# Builds a fresh transport for one request; receives the socket timeout.
TransportFactory = Callable[[float | None], Transport]
