"""
Embed command data models

Value objects that flow from the command parser through the extractor
to the rendered fenced block.
"""

from dataclasses import dataclass
from typing import Optional


# Documents and snippets are text with their raw bytes kept: undecodable
# bytes become lone surrogates and are written back unchanged.
TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class Command:
    """
    Parsed form of one embed directive

    Built by command_parse() from the text inside a directive's parentheses.
    Boundary tokens are kept exactly as written (slashes included) and are
    only compiled later by the extractor.

    Attributes:
        path: Local path (forward slashes) or http(s) URL of the source
        lang: Language tag for the fence, explicit or taken from the extension
        start: Start boundary token, e.g. "/func main/". None means absent;
               "" is a present but empty boundary and anchors at offset 0
        end: End boundary token, "/regex/" or "$". Requires a start

    Example:
        For directive "[embedmd]:# (code.go /func/ $)":
        Command(path="code.go", lang="go", start="/func/", end="$")
    """
    path: str
    lang: str
    start: Optional[str] = None
    end: Optional[str] = None

    def __post_init__(self) -> None:
        if self.start is None and self.end is not None:
            raise ValueError("an end boundary requires a start boundary")


@dataclass(frozen=True)
class Snippet:
    """
    Extracted content ready to be fenced

    Attributes:
        content: Raw bytes returned by the extractor
        lang: Language tag written after the opening fence
    """
    content: bytes
    lang: str

    def block_render(self, fence: str = "```") -> str:
        """
        Render the snippet as a fenced code block

        The body always ends with a newline so the closing fence sits on
        its own line, whether or not the extracted region ended with one.
        Bytes that are not valid UTF-8 survive as surrogate escapes.

        Args:
            fence: Fence token to open and close the block with

        Returns:
            "```<lang>\\n<content>```\\n"

        Example:
            >>> Snippet(b"fmt.Println", "go").block_render()
            '```go\\nfmt.Println\\n```\\n'
        """
        body = self.content.decode(TEXT_ENCODING, errors=TEXT_ERRORS)
        if body and not body.endswith("\n"):
            body += "\n"
        return f"{fence}{self.lang}\n{body}{fence}\n"
