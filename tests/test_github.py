import threading
import urllib.parse
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest

from zbplug.github import (
    PREVIEW,
    SEARCH_API,
    HttpStatusError,
    build_reply,
    first_repo,
    format_repo,
    net_get,
    notnull,
    preview_url,
    search_url,
)

REPO = {
    "full_name": "owner/project",
    "description": "a project",
    "watchers": 10,
    "forks": 2,
    "open_issues": 3,
    "language": None,
    "license": {"key": "mit"},
    "pushed_at": "2022-01-01T00:00:00Z",
    "html_url": "https://example.com/owner/project",
}
PAYLOAD = {"total_count": 1, "items": [REPO]}


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        if self.path == "/ok":
            body = b'{"ok": true}'
            self.send_response(200)
        else:
            body = b"missing"
            self.send_response(404)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


@pytest.fixture
def server():
    httpd = HTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_port}"
    httpd.shutdown()
    httpd.server_close()


def test_notnull():
    assert notnull("") == "None"
    assert notnull("Go") == "Go"


def test_search_url_round_trip():
    url = search_url("zero bot")
    base, query = url.split("?", 1)
    assert base == SEARCH_API
    assert urllib.parse.parse_qs(query) == {"q": ["zero bot"]}


def test_first_repo_empty_raises():
    with pytest.raises(LookupError):
        first_repo(b'{"total_count": 0, "items": []}')


def test_first_repo_from_bytes():
    assert first_repo(b'{"total_count": 1, "items": [{"full_name": "a/b"}]}') == {"full_name": "a/b"}


def test_format_repo_lines():
    text = format_repo(REPO)
    lines = text.split("\n")
    assert lines[0] == REPO["full_name"]
    assert "Star/Fork/Issue: 10/2/3" in lines
    assert "Language: None" in lines
    assert "License: MIT" in lines
    assert text.endswith("\n")


def test_preview_url():
    assert preview_url(REPO) == PREVIEW + "owner/project"


def test_build_reply_modes():
    assert build_reply("-p ", PAYLOAD) == (None, preview_url(REPO))
    text, image = build_reply("-t ", PAYLOAD)
    assert text == format_repo(REPO) and image is None
    assert build_reply(None, PAYLOAD) == (format_repo(REPO), preview_url(REPO))


def test_net_get_ok(server):
    assert net_get(server + "/ok", {"User-Agent": "test"}) == b'{"ok": true}'


def test_net_get_status_error(server):
    with pytest.raises(HttpStatusError) as info:
        net_get(server + "/gone", {"User-Agent": "test"})
    assert info.value.code == 404
    assert str(info.value) == "code 404"