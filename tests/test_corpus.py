import http.server
import threading
import urllib.error

import pytest

from charnn import load_corpus, EmptyCorpusError
from charnn.corpus import fetch_corpus, read_corpus


def test_load_local_corpus_is_lowercased(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_text("Thus Spake\nZarathustra", encoding="utf-8")
    assert load_corpus(path) == "thus spake\nzarathustra"


def test_empty_corpus_file(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    with pytest.raises(EmptyCorpusError):
        load_corpus(path)


def test_fetch_uses_cache(tmp_path):
    cached = tmp_path / "nietzsche.txt"
    cached.write_text("already here", encoding="utf-8")
    # no network access when the file is already cached
    assert fetch_corpus("https://example.invalid/nietzsche.txt", cache_dir=tmp_path) == cached


class _CorpusHandler(http.server.BaseHTTPRequestHandler):
    body = b"full corpus text"
    declared = None

    def do_GET(self):
        self.send_response(200)
        self.send_header("Content-Length", str(self.declared or len(self.body)))
        self.end_headers()
        self.wfile.write(self.body)

    def log_message(self, *args):
        pass


@pytest.fixture
def serve(monkeypatch):
    for var in ("http_proxy", "HTTP_PROXY", "all_proxy", "ALL_PROXY"):
        monkeypatch.delenv(var, raising=False)
    servers = []

    def start(body, declared=None):
        handler = type("Handler", (_CorpusHandler,), {"body": body, "declared": declared})
        server = http.server.HTTPServer(("127.0.0.1", 0), handler)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        servers.append(server)
        return f"http://127.0.0.1:{server.server_address[1]}/nietzsche.txt"

    yield start
    for server in servers:
        server.shutdown()
        server.server_close()


def test_fetch_downloads_into_cache(tmp_path, serve):
    url = serve(b"Full Corpus Text")
    path = fetch_corpus(url, cache_dir=tmp_path)
    assert path == tmp_path / "nietzsche.txt"
    assert read_corpus(path) == "full corpus text"
    assert not (tmp_path / "nietzsche.txt.part").exists()


def test_truncated_download_is_not_cached(tmp_path, serve):
    url = serve(b"partial text", declared=1000)
    with pytest.raises(urllib.error.ContentTooShortError):
        fetch_corpus(url, cache_dir=tmp_path)
    assert list(tmp_path.iterdir()) == []

    # the next call downloads again instead of trusting a partial file
    url = serve(b"whole text")
    assert read_corpus(fetch_corpus(url, cache_dir=tmp_path)) == "whole text"
