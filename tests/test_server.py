import threading
import urllib.error
import urllib.request
from http import HTTPStatus

import pytest

from spacegame.server import create_server, resolve_path

INDEX = b"<html>index</html>"


@pytest.fixture
def site(tmp_path):
    dist = tmp_path / "dist"
    assets = tmp_path / "assets"
    (dist / "pkg").mkdir(parents=True)
    (assets / "images").mkdir(parents=True)
    (dist / "index.html").write_bytes(INDEX)
    (dist / "app.js").write_bytes(b"console.log(1);")
    (assets / "images" / "bg.png").write_bytes(b"\x89PNG")
    (tmp_path / "outside.txt").write_text("hidden")
    return dist, assets


@pytest.fixture
def base_url(site):
    dist, assets = site
    server = create_server("127.0.0.1", 0, dist, assets)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()


def test_resolve_dist_file(site):
    dist, assets = site
    assert resolve_path("/app.js", dist, assets) == (dist / "app.js", HTTPStatus.OK)


def test_resolve_root_is_index(site):
    dist, assets = site
    assert resolve_path("/", dist, assets) == (dist / "index.html", HTTPStatus.OK)


def test_resolve_missing_falls_back_to_index(site):
    dist, assets = site
    assert resolve_path("/play/level", dist, assets) == (
        dist / "index.html",
        HTTPStatus.NOT_FOUND,
    )


def test_resolve_asset(site):
    dist, assets = site
    path, status = resolve_path("/assets/images/bg.png?v=2", dist, assets)
    assert path == assets / "images" / "bg.png"
    assert status == HTTPStatus.OK


def test_resolve_missing_asset_has_no_fallback(site):
    dist, assets = site
    assert resolve_path("/assets/none.png", dist, assets) == (None, HTTPStatus.NOT_FOUND)


def test_resolve_rejects_traversal(site):
    dist, assets = site
    path, status = resolve_path("/../outside.txt", dist, assets)
    assert path == dist / "index.html"
    assert status == HTTPStatus.NOT_FOUND


def test_resolve_without_index(tmp_path):
    assert resolve_path("/x", tmp_path, tmp_path) == (None, HTTPStatus.NOT_FOUND)


def test_http_serves_file(base_url):
    with urllib.request.urlopen(base_url + "/app.js") as response:
        assert response.status == 200
        assert response.read() == b"console.log(1);"


def test_http_fallback_is_404_with_index(base_url):
    with pytest.raises(urllib.error.HTTPError) as info:
        urllib.request.urlopen(base_url + "/somewhere")
    assert info.value.code == 404
    assert info.value.read() == INDEX


def test_http_missing_asset(base_url):
    with pytest.raises(urllib.error.HTTPError) as info:
        urllib.request.urlopen(base_url + "/assets/missing.ogg")
    assert info.value.code == 404