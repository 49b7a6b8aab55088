from __future__ import annotations

import json
import os
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Iterator, Tuple
from urllib.parse import parse_qs, urlsplit

import pytest

from kosmo import API_KEY_ENV, Kosmo

ORDER_RESPONSES: Dict[str, Tuple[int, str]] = {
    "missing": (404, json.dumps({"error": "Order not found"})),
    "revoked": (200, json.dumps({"error": "unauthorized access"})),
    "teapot": (418, "teapot"),
    "oops": (500, "oops"),
    "throttled": (429, json.dumps({"details": [{"message": "a"}, {"message": "b"}]})),
}


@pytest.fixture
def local_kosmo_server() -> Iterator[str]:
    class Handler(BaseHTTPRequestHandler):
        def _reply(self, status: int, body: str) -> None:
            payload = body.encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def _echo(self, **extra: Any) -> str:
            return json.dumps(
                {
                    "authorization": self.headers.get("Authorization"),
                    "content_type": self.headers.get("Content-Type"),
                    "accept": self.headers.get("Accept"),
                    **extra,
                }
            )

        def do_GET(self) -> None:  # noqa: N802
            parts = urlsplit(self.path)
            if parts.path == "/v2/orders":
                query = {k: v[0] for k, v in parse_qs(parts.query).items()}
                self._reply(200, self._echo(orders=[], query=query))
                return
            if parts.path.startswith("/v2/orders/"):
                order_id = parts.path[len("/v2/orders/"):]
                if order_id == "slow":
                    time.sleep(0.2)
                if order_id in ORDER_RESPONSES:
                    self._reply(*ORDER_RESPONSES[order_id])
                    return
                self._reply(200, self._echo(id=order_id, status="created"))
                return
            self._reply(404, "")

        def do_POST(self) -> None:  # noqa: N802
            length = int(self.headers.get("Content-Length") or 0)
            payload = json.loads(self.rfile.read(length) or b"null")
            if self.path == "/v2/quotes":
                self._reply(200, self._echo(quotes=[{"provider": "local", "price": 1.0}], received=payload))
                return
            if self.path == "/v2/orders":
                self._reply(201, self._echo(order={"id": "o-1", "status": "created"}, received=payload))
                return
            self._reply(405, "Method Not Allowed")

        def log_message(self, format: str, *args: Any) -> None:  # noqa: A003
            return

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address
        yield f"http://{host}:{port}/v2"
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=1)


@pytest.fixture
def local_client(local_kosmo_server: str) -> Kosmo:
    return Kosmo("local-key", base_url=local_kosmo_server)


@pytest.fixture
def live_client() -> Kosmo:
    if not os.getenv(API_KEY_ENV):
        pytest.skip(f"{API_KEY_ENV} environment variable not set")
    return Kosmo.from_env()
