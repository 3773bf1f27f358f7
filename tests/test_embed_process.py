"""
End-to-end document processing tests

Runs documents through document_process() with an in-memory fetcher:
parser, extractor, embedder and scanner together.
"""

import posixpath

import pytest

from embedmd.lib.embedder import Embedder
from embedmd.lib.errors import EmbedError, FileNotFound, NoMatch, StatusError
from embedmd.lib.fetch import url_is
from embedmd.lib.scanner import document_process
from embedmd.models.command import Command


CONTENT = """
package main

import "fmt"

func main() {
        fmt.Println("hello, test")
}
"""


class FakeFetcher:
    """In-memory files and URLs, keyed by base_dir-joined path or full URL"""

    def __init__(self, files=None, urls=None):
        self.files = files or {}
        self.urls = urls or {}
        self.calls = []

    def fetch(self, base_dir: str, path: str) -> bytes:
        self.calls.append((base_dir, path))
        if url_is(path):
            if path in self.urls:
                return self.urls[path]
            raise StatusError(404, "Not Found")
        key = posixpath.join(base_dir, path) if base_dir else path
        if key in self.files:
            return self.files[key]
        raise FileNotFound()


def code_files():
    return FakeFetcher(files={"code.go": CONTENT.encode()})


class TestEmbedder:
    """Running single commands"""

    def test_extract_the_whole_file(self):
        embedder = Embedder(fetcher=code_files())
        out = embedder.command_run(Command(path="code.go", lang="go"))
        assert out == "```go\n" + CONTENT + "```\n"

    def test_extract_from_a_different_directory(self):
        fetcher = FakeFetcher(files={"sample/code.go": CONTENT.encode()})
        embedder = Embedder(fetcher=fetcher, base_dir="sample")
        out = embedder.command_run(Command(path="code.go", lang="go"))
        assert out == "```go\n" + CONTENT + "```\n"

    def test_added_line_break(self):
        embedder = Embedder(fetcher=code_files())
        out = embedder.command_run(Command(path="code.go", lang="go", start=r"/fmt\.Println/"))
        assert out == "```go\nfmt.Println\n```\n"

    def test_missing_file(self):
        embedder = Embedder(fetcher=FakeFetcher())
        with pytest.raises(FileNotFound) as exc_info:
            embedder.command_run(Command(path="code.go", lang="go"))
        assert str(exc_info.value) == "could not read code.go: file does not exist"

    def test_unmatched_regexp(self):
        embedder = Embedder(fetcher=code_files())
        with pytest.raises(NoMatch) as exc_info:
            embedder.command_run(Command(path="code.go", lang="go", start="/potato/"))
        assert str(exc_info.value) == 'could not extract content from code.go: could not match "/potato/"'


class TestProcess:
    """Whole documents"""

    def test_missing_file(self):
        source = "# This is some markdown\n[embedmd]:# (code.go)\nYay!\n"
        with pytest.raises(EmbedError) as exc_info:
            document_process(source, fetcher=FakeFetcher())
        assert str(exc_info.value) == "2: could not read code.go: file does not exist"

    def test_generating_code_for_first_time(self):
        source = "# This is some markdown\n[embedmd]:# (code.go)\nYay!\n"
        out = document_process(source, fetcher=code_files())
        assert out == (
            "# This is some markdown\n"
            "[embedmd]:# (code.go)\n"
            "```go\n" + CONTENT + "```\n"
            "Yay!\n"
        )

    def test_generating_code_with_base_dir(self):
        source = "# This is some markdown\n[embedmd]:# (code.go)\nYay!\n"
        fetcher = FakeFetcher(files={"sample/code.go": CONTENT.encode()})
        out = document_process(source, fetcher=fetcher, base_dir="sample")
        assert "```go\n" + CONTENT + "```\n" in out
        assert fetcher.calls == [("sample", "code.go")]

    def test_replacing_existing_code(self):
        source = (
            "# This is some markdown\n"
            "[embedmd]:# (code.go)\n"
            "```go\n" + CONTENT + "```\n"
            "Yay!\n"
        )
        assert document_process(source, fetcher=code_files()) == source

    def test_replacing_outdated_code(self):
        source = "[embedmd]:# (code.go /func main/ /^}/)\n```go\nfunc old() {}\n```\n"
        out = document_process(source, fetcher=code_files())
        assert out == (
            "[embedmd]:# (code.go /func main/ /^}/)\n"
            "```go\n"
            "func main() {\n"
            '        fmt.Println("hello, test")\n'
            "}\n"
            "```\n"
        )

    def test_embedding_code_from_a_url(self):
        source = "# This is some markdown\n[embedmd]:# (https://fakeurl.com/main.go)\nYay!\n"
        fetcher = FakeFetcher(urls={"https://fakeurl.com/main.go": CONTENT.encode()})
        out = document_process(source, fetcher=fetcher)
        assert out == (
            "# This is some markdown\n"
            "[embedmd]:# (https://fakeurl.com/main.go)\n"
            "```go\n" + CONTENT + "```\n"
            "Yay!\n"
        )

    def test_embedding_code_from_a_url_not_found(self):
        source = "# This is some markdown\n[embedmd]:# (https://fakeurl.com/main.go)\nYay!\n"
        with pytest.raises(StatusError) as exc_info:
            document_process(source, fetcher=FakeFetcher())
        assert str(exc_info.value) == "2: could not read https://fakeurl.com/main.go: status 404 Not Found"

    def test_ignore_commands_in_code_blocks(self):
        source = (
            "# This is some markdown\n"
            "```markdown\n"
            "[embedmd]:# (nothing.md)\n"
            "```\n"
            "Yay!\n"
        )
        fetcher = FakeFetcher()
        assert document_process(source, fetcher=fetcher) == source
        assert fetcher.calls == []

    def test_explicit_language(self):
        source = "[embedmd]:# (code.go golang /package main/)\n"
        out = document_process(source, fetcher=code_files())
        assert out == "[embedmd]:# (code.go golang /package main/)\n```golang\npackage main\n```\n"

    def test_run_twice(self):
        """Processing the output again is a no-op"""
        source = (
            "# Doc\n"
            "[embedmd]:# (code.go)\n"
            "Some text.\n"
            "[embedmd]:# (code.go /func main/ $)\n"
            "\n"
            "[embedmd]:# (code.go /import.*/)\n"
        )
        first = document_process(source, fetcher=code_files())
        second = document_process(first, fetcher=code_files())
        assert second == first

    def test_no_directives_is_identity(self):
        source = "# Title\r\n\r\n```python\r\nprint(1)\r\n```\r\nend"
        assert document_process(source, fetcher=FakeFetcher()) == source
