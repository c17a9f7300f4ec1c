from .config import TransportConfig
from .errors import HttpParseError, ConnectionClosedError, InvalidRequestError
from .http_protocol import HttpProtocol, HttpRequest, Response
from .status import StatusCode
from .transport import Transport


class Http1Protocol(HttpProtocol):
    """
    One-shot HTTP/1.1 exchange over a Transport.

    The request is always sent with `Connection: close` and the response is
    read until the peer closes the stream, so `raw` holds the complete
    status line, headers and body exactly as received.
    """

    _LINE_END = b"\r\n"

    def __init__(self, transport: Transport, config: TransportConfig | None = None):
        self._transport: Transport = transport
        self._config: TransportConfig = config or TransportConfig()
        self._buffer: bytearray = bytearray()

    def connect(self, host: str, port: int) -> None:
        self._transport.connect(host, port)

    def disconnect(self) -> None:
        self._transport.close()

    def perform_request(self, request: HttpRequest) -> Response:
        return self.exchange(self.build_request(request))

    def exchange(self, data: bytes) -> Response:
        """Writes an already serialized request and reads the response to completion."""
        self._transport.write(data)
        self._read_full_response()

        raw = bytes(self._buffer)
        try:
            status = self.parse_status(raw)
        except HttpParseError as e:
            return Response(raw=raw, status=StatusCode.FAILED, error=e)
        return Response(raw=raw, status=status)

    @staticmethod
    def build_request(request: HttpRequest) -> bytes:
        try:
            return Http1Protocol._serialize(request)
        except UnicodeEncodeError as e:
            raise InvalidRequestError(f"Request cannot be encoded: {e}") from e

    @staticmethod
    def _serialize(request: HttpRequest) -> bytes:
        buffer = bytearray()

        request_line = f"{request.method.value} {request.target} HTTP/1.1\r\n"
        buffer += request_line.encode("utf-8")
        buffer += f"Host: {request.host}\r\n".encode("utf-8")
        buffer += b"Connection: close\r\n"

        if not request.payloads:
            buffer += b"\r\n"

        for payload in request.payloads:
            body = payload.encode()
            buffer += f"Content-Length: {len(body)}\r\n".encode("ascii")
            buffer += f"Content-Type: {payload.content_type}\r\n".encode("ascii")
            buffer += b"\r\n"
            buffer += body

        return bytes(buffer)

    @classmethod
    def parse_status(cls, raw: bytes) -> StatusCode | int:
        status_line_end = raw.find(cls._LINE_END)
        if status_line_end == -1:
            raise HttpParseError("Could not find status line terminator.")

        tokens = raw[:status_line_end].split()
        if len(tokens) < 2:
            raise HttpParseError("Could not find status code in status line.")

        try:
            code = int(tokens[1])
        except ValueError:
            raise HttpParseError(f"Invalid status code in status line: {tokens[1]!r}")

        return StatusCode.lookup(code)

    def _read_full_response(self) -> None:
        self._buffer.clear()
        chunk = bytearray(self._config.read_chunk_size)

        while True:
            try:
                bytes_read = self._transport.read_into(chunk)
            except ConnectionClosedError:
                if not self._buffer:
                    raise
                break

            if bytes_read == 0:
                break

            self._buffer += chunk[:bytes_read]
