"""
Runs a single embed command: fetch, extract, render
"""

from typing import Optional

from ..config import AppSettings, appsettings
from ..models.command import Command, Snippet
from .errors import ExtractError, FetchError
from .extract import content_extract
from .fetch import ContentFetcher, Fetcher
from .log import LOG


class Embedder:
    """
    Produces the fenced block for a directive

    Args:
        fetcher: Content source, defaults to ContentFetcher()
        base_dir: Directory local paths are resolved against
        settings: AppSettings (fence token)
    """

    def __init__(
        self,
        fetcher: Optional[Fetcher] = None,
        base_dir: str = "",
        settings: Optional[AppSettings] = None,
    ) -> None:
        self.settings = settings or appsettings
        self.fetcher = fetcher or ContentFetcher(settings=self.settings)
        self.base_dir = base_dir

    def snippet_make(self, cmd: Command) -> Snippet:
        """
        Fetch and extract the content a command refers to

        Errors keep their type; only the message is prefixed with the
        phase and path, e.g. "could not read code.go: file does not exist".
        """
        try:
            source = self.fetcher.fetch(self.base_dir, cmd.path)
        except FetchError as exc:
            raise exc.annotate(f"could not read {cmd.path}")

        try:
            content = content_extract(source, cmd.start, cmd.end)
        except ExtractError as exc:
            raise exc.annotate(f"could not extract content from {cmd.path}")

        LOG(f"Extracted {len(content)} bytes from {cmd.path}", level=2)
        return Snippet(content=content, lang=cmd.lang)

    def command_run(self, cmd: Command) -> str:
        """Return the rendered fenced block for cmd"""
        return self.snippet_make(cmd).block_render(self.settings.fence_token)
