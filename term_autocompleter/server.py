"""
Threaded JSON HTTP front end for an AutoCompleter instance.

Routes:
- `POST /terms` body `{"term": "..."}` -> `{"term", "count"}`
- `GET /autocomplete?prefix=...&boost=...` -> `{"suggestions": [...]}`
- `DELETE /terms/<term>` -> `{"deleted", "remaining"}`
- `GET /health` -> `{"status": "ok", "terms": n}`

Errors: 400 for invalid input or a malformed body, 404 for unknown routes,
405 for a known path with the wrong method. Each body is JSON.

The engine is built by the caller and handed in; every request thread shares it.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Tuple
from urllib.parse import parse_qs, unquote, urlparse

from term_autocompleter.core.protocols import AutocompleteServiceProtocol
from term_autocompleter.errors import InvalidInput
from term_autocompleter.utils.logger_utils import get_logger

logger = get_logger(__name__)

MAX_BODY_BYTES = 64 * 1024
TERMS_PREFIX = "/terms/"


class BadRequest(Exception):
    """Malformed request body, mapped to 400."""


class AutocompleteServer(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: Tuple[str, int], service: AutocompleteServiceProtocol):
        super().__init__(address, AutocompleteHandler)
        self.service = service


class AutocompleteHandler(BaseHTTPRequestHandler):
    server: AutocompleteServer

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        logger.debug("%s - %s", self.address_string(), format % args)

    @property
    def service(self) -> AutocompleteServiceProtocol:
        return self.server.service

    def _send_json(self, status: int, payload: Dict[str, Any]) -> None:
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _send_error(self, status: int, message: str) -> None:
        self._send_json(status, {"error": message})

    def _read_json_body(self) -> Dict[str, Any]:
        try:
            length = int(self.headers.get("Content-Length", "0"))
        except ValueError:
            raise BadRequest("invalid Content-Length")
        if length <= 0:
            raise BadRequest("request body required")
        if length > MAX_BODY_BYTES:
            raise BadRequest("request body too large")
        raw = self.rfile.read(length)
        try:
            parsed = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise BadRequest(f"malformed JSON: {exc}")
        if not isinstance(parsed, dict):
            raise BadRequest("body must be a JSON object")
        return parsed

    def _dispatch(self, handler) -> None:
        try:
            handler()
        except (InvalidInput, BadRequest) as exc:
            logger.warning("rejected %s %s: %s", self.command, self.path, exc)
            self._send_error(HTTPStatus.BAD_REQUEST, str(exc))

    # routes ----------------------------------------------------------------
    def do_GET(self) -> None:  # noqa: N802
        parsed = urlparse(self.path)
        if parsed.path == "/autocomplete":
            self._dispatch(lambda: self._autocomplete(parse_qs(parsed.query, keep_blank_values=True)))
            return
        if parsed.path == "/health":
            self._send_json(HTTPStatus.OK, {"status": "ok", "terms": len(self.service)})
            return
        if parsed.path == "/terms" or parsed.path.startswith(TERMS_PREFIX):
            self._send_error(HTTPStatus.METHOD_NOT_ALLOWED, "method not allowed")
            return
        self._send_error(HTTPStatus.NOT_FOUND, "unknown endpoint")

    def do_POST(self) -> None:  # noqa: N802
        parsed = urlparse(self.path)
        if parsed.path == "/terms":
            self._dispatch(self._register)
            return
        if parsed.path in ("/autocomplete", "/health") or parsed.path.startswith(TERMS_PREFIX):
            self._send_error(HTTPStatus.METHOD_NOT_ALLOWED, "method not allowed")
            return
        self._send_error(HTTPStatus.NOT_FOUND, "unknown endpoint")

    def do_DELETE(self) -> None:  # noqa: N802
        parsed = urlparse(self.path)
        if parsed.path.startswith(TERMS_PREFIX):
            term = unquote(parsed.path[len(TERMS_PREFIX):])
            self._send_json(HTTPStatus.OK, dict(self.service.delete(term)))
            return
        if parsed.path in ("/terms", "/autocomplete", "/health"):
            self._send_error(HTTPStatus.METHOD_NOT_ALLOWED, "method not allowed")
            return
        self._send_error(HTTPStatus.NOT_FOUND, "unknown endpoint")

    def _register(self) -> None:
        body = self._read_json_body()
        if "term" not in body:
            raise BadRequest("missing field: term")
        self._send_json(HTTPStatus.OK, dict(self.service.register(body["term"])))

    def _autocomplete(self, query: Dict[str, Any]) -> None:
        prefix = query.get("prefix", [""])[0]
        boost = query.get("boost", [None])[0] or None
        self._send_json(HTTPStatus.OK, dict(self.service.autocomplete(prefix, boost=boost)))


def make_server(service: AutocompleteServiceProtocol, host: str = "127.0.0.1", port: int = 8080) -> AutocompleteServer:
    """Bind without serving; port 0 picks a free port (see `server_address`)."""
    return AutocompleteServer((host, port), service)


def serve(service: AutocompleteServiceProtocol, host: str = "127.0.0.1", port: int = 8080) -> None:
    httpd = make_server(service, host, port)
    bound_host, bound_port = httpd.server_address[:2]
    logger.info("serving autocomplete on http://%s:%s", bound_host, bound_port)
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("shutting down")
    finally:
        httpd.server_close()
