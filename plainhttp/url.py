import logging
import re

from dataclasses import dataclass


logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"^(https?)://([^/]+)([^?#]*)(\?[^#]*)?(#.*)?$")
_PORT_SUFFIX = re.compile(r"^(.*):(\d+)$")


def decompose(raw: str) -> tuple[str, str, str, str] | None:
    """
    Splits a raw URL into (protocol, domain, path, query).

    The fragment is matched but dropped. Returns None when the string does
    not match the grammar. Nothing is normalized.
    """
    match = URL_PATTERN.fullmatch(raw)
    if match is None:
        return None

    protocol, domain, path, query, _fragment = match.groups()
    return protocol, domain, path, query or ""


@dataclass(frozen=True)
class ParseFailure:
    raw: str
    reason: str


class URL:
    """
    An immutable, eagerly parsed URL.

    An input that does not match the grammar still produces a URL object:
    all components are empty strings and a warning is logged. Use
    parse_url() to get an explicit ParseFailure instead.
    """

    __slots__ = ("_raw", "_protocol", "_domain", "_path", "_query")

    def __init__(self, raw: str):
        components = decompose(raw)
        if components is None:
            logger.warning("Invalid URL: %r", raw)
            components = ("", "", "", "")
        self._set(raw, components)

    @classmethod
    def _from_components(cls, raw: str, components: tuple[str, str, str, str]) -> "URL":
        url = cls.__new__(cls)
        url._set(raw, components)
        return url

    def _set(self, raw: str, components: tuple[str, str, str, str]) -> None:
        object.__setattr__(self, "_raw", raw)
        for name, value in zip(("_protocol", "_domain", "_path", "_query"), components):
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(f"URL is immutable; cannot set '{name}'")

    def __reduce__(self):
        return URL._from_components, (self._raw, self._components())

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def protocol(self) -> str:
        return self._protocol

    @property
    def domain(self) -> str:
        return self._domain

    @property
    def path(self) -> str:
        return self._path

    @property
    def query(self) -> str:
        return self._query

    @property
    def is_valid(self) -> bool:
        return bool(self._protocol)

    @property
    def host(self) -> str:
        """The domain without an explicit port suffix."""
        match = _PORT_SUFFIX.match(self._domain)
        return match.group(1) if match else self._domain

    @property
    def port(self) -> int | None:
        """The explicit port in the domain, or None when there is none."""
        match = _PORT_SUFFIX.match(self._domain)
        return int(match.group(2)) if match else None

    @property
    def target(self) -> str:
        """The request-target sent on the request line."""
        return (self._path + self._query) or "/"

    def __str__(self) -> str:
        if not self.is_valid:
            return ""
        return f"{self._protocol}://{self._domain}{self._path}{self._query}"

    def __repr__(self) -> str:
        return f"URL({self._raw!r})"

    def __eq__(self, other):
        if not isinstance(other, URL):
            return NotImplemented
        return self._components() == other._components()

    def __hash__(self) -> int:
        return hash(self._components())

    def _components(self) -> tuple[str, str, str, str]:
        return self._protocol, self._domain, self._path, self._query


def parse_url(raw: str) -> URL | ParseFailure:
    """Parses a raw URL, returning a ParseFailure instead of an empty URL."""
    components = decompose(raw)
    if components is None:
        return ParseFailure(raw=raw, reason="URL does not match 'http[s]://domain[path][?query][#fragment]'")
    return URL._from_components(raw, components)
