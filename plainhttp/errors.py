class PlainHttpError(Exception):
    """Base exception for the plainhttp library."""
    pass

# --- Transport Errors ---

class TransportError(PlainHttpError):
    """A generic error occurred in the transport layer."""
    pass

class DnsFailureError(TransportError): pass
class SocketCreateError(TransportError): pass
class SocketConnectError(TransportError): pass
class SocketWriteError(TransportError): pass
class SocketReadError(TransportError): pass
class ConnectionClosedError(TransportError): pass

# --- HTTP Client Errors ---

class HttpClientError(PlainHttpError):
    """A generic error occurred in the HTTP client logic."""
    pass

class HttpParseError(HttpClientError): pass
class InvalidRequestError(HttpClientError): pass
