"""Static file server for the built web game and its assets."""

from __future__ import annotations

import argparse
import mimetypes
from functools import partial
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import unquote, urlsplit

DIST_DIR = "game/dist"
ASSETS_DIR = "game/assets"
ASSETS_PREFIX = "/assets"
INDEX_FILE = "index.html"


def _lookup(root: Path, path: str) -> Path | None:
    segments = [segment for segment in path.split("/") if segment]
    if any(s in (".", "..") or "\\" in s or "\x00" in s for s in segments):
        return None
    candidate = root.joinpath(*segments)
    if candidate.is_dir():
        candidate = candidate / INDEX_FILE
    return candidate if candidate.is_file() else None


def resolve_path(
    request_path: str, dist_dir: str | Path, assets_dir: str | Path
) -> tuple[Path | None, HTTPStatus]:
    """Map a request path to the file to send and the status to send it with.

    Paths under ``/assets`` come from ``assets_dir``; anything else from
    ``dist_dir``, where a missing file falls back to its index page sent
    with a 404 status.
    """
    path = unquote(urlsplit(request_path).path)
    if path == ASSETS_PREFIX or path.startswith(ASSETS_PREFIX + "/"):
        found = _lookup(Path(assets_dir), path[len(ASSETS_PREFIX):])
        return found, HTTPStatus.OK if found else HTTPStatus.NOT_FOUND
    dist = Path(dist_dir)
    found = _lookup(dist, path)
    if found:
        return found, HTTPStatus.OK
    index = dist / INDEX_FILE
    return (index if index.is_file() else None), HTTPStatus.NOT_FOUND


class GameRequestHandler(BaseHTTPRequestHandler):
    """Serves GET and HEAD requests from the game and asset directories."""

    def __init__(self, *args, dist_dir: str | Path, assets_dir: str | Path, **kwargs):
        self.dist_dir = Path(dist_dir)
        self.assets_dir = Path(assets_dir)
        super().__init__(*args, **kwargs)

    def do_GET(self) -> None:
        self._respond(send_body=True)

    def do_HEAD(self) -> None:
        self._respond(send_body=False)

    def _respond(self, send_body: bool) -> None:
        path, status = resolve_path(self.path, self.dist_dir, self.assets_dir)
        if path is None:
            self.send_error(HTTPStatus.NOT_FOUND)
            return
        try:
            data = path.read_bytes()
        except OSError:
            self.send_error(HTTPStatus.NOT_FOUND)
            return
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        if send_body:
            self.wfile.write(data)


def create_server(
    host: str, port: int, dist_dir: str | Path, assets_dir: str | Path
) -> ThreadingHTTPServer:
    """Create (but do not start) a server bound to ``host`` and ``port``."""
    handler = partial(GameRequestHandler, dist_dir=dist_dir, assets_dir=assets_dir)
    return ThreadingHTTPServer((host, port), handler)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Serve the web build of the game.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--dist", default=DIST_DIR)
    parser.add_argument("--assets", default=ASSETS_DIR)
    args = parser.parse_args(argv)

    server = create_server(args.host, args.port, args.dist, args.assets)
    host, port = server.server_address[:2]
    print(f"Serving on http://{host}:{port}/")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0