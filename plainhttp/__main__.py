import argparse
import logging
import sys

from .config import DEFAULT_PORT, TransportConfig
from .http_protocol import FormBody, HttpMethod, JsonBody, NO_BODY
from .plainhttp import Request
from .url import ParseFailure, parse_url


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="plainhttp", description="Send one plaintext HTTP/1.1 request.")

    parser.add_argument("method", type=str.upper, choices=[m.value for m in HttpMethod], help="HTTP method.")
    parser.add_argument("url", help="Target URL, e.g. http://example.com/path?x=1")

    body_group = parser.add_mutually_exclusive_group()
    body_group.add_argument("--data", help="Form-encoded request body.")
    body_group.add_argument("--json", help="JSON request body, sent as given.")

    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port used when the URL has none.")
    parser.add_argument("--timeout", type=float, default=None, help="Socket timeout in seconds.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    url = parse_url(args.url)
    if isinstance(url, ParseFailure):
        print(f"Error: invalid URL {url.raw!r}: {url.reason}", file=sys.stderr)
        return 1

    if args.json is not None:
        body = JsonBody(args.json)
    elif args.data is not None:
        body = FormBody(args.data)
    else:
        body = NO_BODY

    try:
        config = TransportConfig(port=args.port, timeout=args.timeout)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    response = Request(url, config=config).execute(args.method, body)
    if response.failed:
        print(f"Error: request failed: {response.error}", file=sys.stderr)
        return 1

    sys.stdout.buffer.write(response.raw)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
