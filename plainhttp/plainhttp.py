import logging

from .config import TransportConfig
from .errors import InvalidRequestError, TransportError
from .http1_protocol import Http1Protocol
from .http_protocol import (
    FormBody,
    HttpMethod,
    HttpRequest,
    JsonBody,
    NO_BODY,
    NoBody,
    Payload,
    Response,
)
from .status import StatusCode
from .tcp_transport import TcpTransport
from .transport import TransportFactory
from .url import URL


logger = logging.getLogger(__name__)


class Request:
    """
    Sends requests to a single URL.

    Each call opens its own connection, performs exactly one round-trip and
    closes it again. Failures never raise: they come back as a Response
    whose status is StatusCode.FAILED and whose `error` holds the cause.
    """

    def __init__(
        self,
        url: URL,
        config: TransportConfig | None = None,
        transport_factory: TransportFactory = TcpTransport,
    ):
        self._url = url
        self._config = config or TransportConfig()
        self._transport_factory = transport_factory

    @property
    def url(self) -> URL:
        return self._url

    def get(self, data: str | bytes = "", json: str | bytes = "", *, body: Payload | None = None) -> Response:
        return self._perform(HttpMethod.GET, data, json, body)

    def post(self, data: str | bytes = "", json: str | bytes = "", *, body: Payload | None = None) -> Response:
        return self._perform(HttpMethod.POST, data, json, body)

    def put(self, data: str | bytes = "", json: str | bytes = "", *, body: Payload | None = None) -> Response:
        return self._perform(HttpMethod.PUT, data, json, body)

    def delete(self, data: str | bytes = "", json: str | bytes = "", *, body: Payload | None = None) -> Response:
        return self._perform(HttpMethod.DELETE, data, json, body)

    def execute(self, method: HttpMethod | str, body: Payload = NO_BODY) -> Response:
        try:
            method = HttpMethod(method)
        except ValueError as e:
            raise InvalidRequestError(f"Unsupported HTTP method: {method!r}") from e

        if isinstance(body, NoBody):
            payloads = []
        elif isinstance(body, (FormBody, JsonBody)):
            payloads = [body]
        else:
            raise InvalidRequestError(f"Unsupported payload type: {type(body).__name__}")

        return self._send(method, payloads)

    def _perform(self, method: HttpMethod, data, json, body: Payload | None) -> Response:
        if body is not None:
            if data or json:
                raise InvalidRequestError("Pass either 'body' or 'data'/'json', not both.")
            return self.execute(method, body)

        payloads: list[FormBody | JsonBody] = []
        if json:
            payloads.append(JsonBody(json))
        if data:
            payloads.append(FormBody(data))

        if len(payloads) > 1:
            logger.warning(
                "%s %s: both form data and a JSON body were supplied; "
                "sending both blocks produces a malformed message",
                method.value, self._url,
            )

        return self._send(method, payloads)

    def _send(self, method: HttpMethod, payloads: list[FormBody | JsonBody]) -> Response:
        request = HttpRequest(
            method=method,
            host=self._url.domain,
            target=self._url.target,
            payloads=payloads,
        )
        try:
            data = Http1Protocol.build_request(request)
        except InvalidRequestError as e:
            logger.debug("%s %s: %s", method.value, self._url.raw, e)
            return Response(raw=b"", status=StatusCode.FAILED, error=e)

        port = self._url.port if self._url.port is not None else self._config.port
        protocol = Http1Protocol(self._transport_factory(self._config.timeout), self._config)

        try:
            protocol.connect(self._url.host, port)
            response = protocol.exchange(data)
        except TransportError as e:
            logger.debug("%s %s failed: %s", method.value, self._url.raw, e)
            return Response(raw=b"", status=StatusCode.FAILED, error=e)
        finally:
            protocol.disconnect()

        if response.error is not None:
            logger.debug("%s %s: unreadable status line: %s", method.value, self._url.raw, response.error)
        return response


def to_request(url: str, config: TransportConfig | None = None) -> Request:
    """Builds a Request for a raw URL string."""
    return Request(URL(url), config=config)
