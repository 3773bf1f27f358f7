"""
Content fetcher tests

Local reads go through pytest's tmp_path; remote fetches go through an
httpx.MockTransport so no network is touched.
"""

import httpx
import pytest

from embedmd.config import AppSettings
from embedmd.lib.errors import FetchError, FileNotFound, InvalidURL, StatusError
from embedmd.lib.fetch import ContentFetcher, url_is
from embedmd.lib.scanner import document_process


SOURCE = b"package main\n\nfunc main() {}\n"


def mock_client(routes):
    """httpx.Client answering 200 for known URLs and 404 otherwise"""

    def handler(request: httpx.Request) -> httpx.Response:
        body = routes.get(str(request.url))
        if body is None:
            return httpx.Response(404)
        return httpx.Response(200, content=body)

    return httpx.Client(transport=httpx.MockTransport(handler))


class TestLocalFiles:
    """Paths resolved against the document directory"""

    def test_read_relative_to_base_dir(self, tmp_path):
        (tmp_path / "code.go").write_bytes(SOURCE)
        assert ContentFetcher().fetch(str(tmp_path), "code.go") == SOURCE

    def test_forward_slash_subdirectory(self, tmp_path):
        (tmp_path / "sample").mkdir()
        (tmp_path / "sample" / "code.go").write_bytes(SOURCE)
        assert ContentFetcher().fetch(str(tmp_path), "sample/code.go") == SOURCE

    def test_empty_base_dir_uses_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "code.go").write_bytes(SOURCE)
        monkeypatch.chdir(tmp_path)
        assert ContentFetcher().fetch("", "code.go") == SOURCE

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFound, match="file does not exist"):
            ContentFetcher().fetch(str(tmp_path), "nope.go")

    def test_directory_is_not_a_file(self, tmp_path):
        (tmp_path / "pkg").mkdir()
        with pytest.raises(FetchError) as exc_info:
            ContentFetcher().fetch(str(tmp_path), "pkg")
        assert not isinstance(exc_info.value, FileNotFound)

    def test_bytes_returned_unmodified(self, tmp_path):
        raw = b"line one\r\nline two\r\n"
        (tmp_path / "crlf.txt").write_bytes(raw)
        assert ContentFetcher().fetch(str(tmp_path), "crlf.txt") == raw


class TestRemote:
    """http(s) URLs fetched with httpx"""

    def test_url_detection(self):
        assert url_is("http://example.com/a.go")
        assert url_is("https://example.com/a.go")
        assert not url_is("ftp://example.com/a.go")
        assert not url_is("docs/http.go")

    def test_fetch_ok(self):
        client = mock_client({"https://example.com/main.go": SOURCE})
        assert ContentFetcher(client=client).fetch("", "https://example.com/main.go") == SOURCE

    def test_base_dir_ignored_for_urls(self):
        client = mock_client({"https://example.com/main.go": SOURCE})
        assert ContentFetcher(client=client).fetch("docs", "https://example.com/main.go") == SOURCE

    def test_not_found(self):
        client = mock_client({})
        with pytest.raises(StatusError) as exc_info:
            ContentFetcher(client=client).fetch("", "https://example.com/main.go")
        assert str(exc_info.value) == "status 404 Not Found"
        assert exc_info.value.status_code == 404

    def test_non_200_success_is_rejected(self):
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(204)))
        with pytest.raises(StatusError, match="status 204"):
            ContentFetcher(client=client).fetch("", "https://example.com/main.go")

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        with pytest.raises(FetchError, match="connection refused"):
            ContentFetcher(client=client).fetch("", "https://example.com/main.go")

    def test_invalid_url(self):
        def handler(request):
            raise httpx.InvalidURL("Invalid port: 'org:sample.go'")

        client = httpx.Client(transport=httpx.MockTransport(handler))
        with pytest.raises(InvalidURL) as exc_info:
            ContentFetcher(client=client).fetch("", "https://golang.org/sample.go")
        assert str(exc_info.value).startswith("parse https://golang.org/sample.go: ")

    def test_user_agent_from_settings(self, monkeypatch):
        seen = {}

        def handler(request):
            seen["ua"] = request.headers["User-Agent"]
            return httpx.Response(200, content=SOURCE)

        transport = httpx.MockTransport(handler)
        original_client = httpx.Client

        def client_factory(**kwargs):
            return original_client(transport=transport, **kwargs)

        monkeypatch.setattr(httpx, "Client", client_factory)
        fetcher = ContentFetcher(settings=AppSettings(user_agent="docs-bot/2.0"))
        assert fetcher.fetch("", "https://example.com/main.go") == SOURCE
        assert seen["ua"] == "docs-bot/2.0"


class TestDocumentWithRemoteSource:
    """URL errors surface with line number and path"""

    def test_url_not_found(self):
        source = "# This is some markdown\n[embedmd]:# (https://fakeurl.com/main.go)\nYay!\n"
        fetcher = ContentFetcher(client=mock_client({}))
        with pytest.raises(StatusError) as exc_info:
            document_process(source, fetcher=fetcher)
        assert str(exc_info.value) == "2: could not read https://fakeurl.com/main.go: status 404 Not Found"

    def test_url_embedded(self):
        source = "[embedmd]:# (https://fakeurl.com/main.go /func main/)\n"
        fetcher = ContentFetcher(client=mock_client({"https://fakeurl.com/main.go": SOURCE}))
        out = document_process(source, fetcher=fetcher)
        assert out == source + "```go\nfunc main\n```\n"
