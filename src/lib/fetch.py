"""
Content fetching for embed directives

A Fetcher turns the path named in a directive into bytes. Paths starting
with http:// or https:// are downloaded; anything else is read from disk
relative to the directory of the Markdown document.

The scanner and embedder only depend on the Fetcher protocol, so tests
can pass an in-memory implementation instead of touching real I/O.
"""

from pathlib import Path, PurePosixPath
from typing import Optional, Protocol

import httpx

from ..config import AppSettings, appsettings
from .errors import FetchError, FileNotFound, InvalidURL, StatusError
from .log import LOG


URL_PREFIXES = ("http://", "https://")


def url_is(path: str) -> bool:
    """True if the directive path is a remote URL"""
    return path.startswith(URL_PREFIXES)


class Fetcher(Protocol):
    """Anything that can resolve a directive path to content"""

    def fetch(self, base_dir: str, path: str) -> bytes:
        ...


class ContentFetcher:
    """
    Default fetcher: local files plus HTTP(S) via httpx

    Args:
        client: Optional httpx.Client to reuse (e.g. one built on a
                MockTransport in tests). When omitted a short-lived
                client is created per request.
        settings: AppSettings for timeout and User-Agent
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        settings: Optional[AppSettings] = None,
    ) -> None:
        self.client = client
        self.settings = settings or appsettings

    def fetch(self, base_dir: str, path: str) -> bytes:
        """
        Fetch the content named by a directive

        Args:
            base_dir: Directory of the Markdown document ("" for cwd)
            path: Forward-slash path or http(s) URL

        Returns:
            Raw content bytes

        Raises:
            FileNotFound: Local file does not exist
            StatusError: Server answered with anything but 200
            InvalidURL: URL could not be parsed
            FetchError: Any other read or transport failure
        """
        if url_is(path):
            return self.url_fetch(path)
        return self.file_read(base_dir, path)

    def file_read(self, base_dir: str, path: str) -> bytes:
        """Read a local file, resolving forward-slash path against base_dir"""
        target = Path(base_dir or ".").joinpath(*PurePosixPath(path).parts)
        LOG(f"Reading {target}", level=3)
        try:
            return target.read_bytes()
        except FileNotFoundError as exc:
            raise FileNotFound() from exc
        except OSError as exc:
            raise FetchError((exc.strerror or str(exc)).lower()) from exc

    def url_fetch(self, url: str) -> bytes:
        """GET a URL and return the body of a 200 response"""
        LOG(f"Fetching {url}", level=3)
        if self.client is not None:
            return self.response_read(self.client, url)

        headers = {"User-Agent": self.settings.user_agent}
        with httpx.Client(timeout=self.settings.http_timeout, headers=headers) as client:
            return self.response_read(client, url)

    def response_read(self, client: httpx.Client, url: str) -> bytes:
        try:
            response = client.get(url)
        except httpx.InvalidURL as exc:
            raise InvalidURL(url, str(exc)) from exc
        except httpx.HTTPError as exc:
            raise FetchError(str(exc)) from exc

        if response.status_code != httpx.codes.OK:
            raise StatusError(response.status_code, response.reason_phrase)
        return response.content
