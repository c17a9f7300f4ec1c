import json

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from .errors import PlainHttpError
from .status import StatusCode


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


# --- Payloads ---

@dataclass(frozen=True)
class NoBody:
    pass


@dataclass(frozen=True)
class FormBody:
    data: str | bytes
    content_type: str = field(default="application/x-www-form-urlencoded", init=False)

    def encode(self) -> bytes:
        return self.data.encode("utf-8") if isinstance(self.data, str) else bytes(self.data)


@dataclass(frozen=True)
class JsonBody:
    data: str | bytes
    content_type: str = field(default="application/json", init=False)

    @classmethod
    def from_object(cls, obj: Any) -> "JsonBody":
        return cls(json.dumps(obj, separators=(",", ":")))

    def encode(self) -> bytes:
        return self.data.encode("utf-8") if isinstance(self.data, str) else bytes(self.data)


Payload = NoBody | FormBody | JsonBody

NO_BODY = NoBody()


@dataclass
class HttpRequest:
    method: HttpMethod = HttpMethod.GET
    host: str = ""
    target: str = "/"
    # Written in order, each with its own Content-Length/Content-Type block.
    payloads: list[FormBody | JsonBody] = field(default_factory=list)


@dataclass(frozen=True)
class Response:
    raw: bytes
    status: StatusCode | int
    error: PlainHttpError | None = None

    @property
    def failed(self) -> bool:
        return self.status == StatusCode.FAILED


class HttpProtocol(Protocol):
    def connect(self, host: str, port: int) -> None:
        ...

    def disconnect(self) -> None:
        ...

    def perform_request(self, request: HttpRequest) -> Response:
        ...
