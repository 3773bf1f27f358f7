"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use EMBEDMD_ prefix (e.g., EMBEDMD_HTTP_TIMEOUT=10).

Settings can also be loaded from a .env file in the current directory.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use EMBEDMD_ prefix.

    Examples:
        EMBEDMD_HTTP_TIMEOUT=5
        EMBEDMD_USER_AGENT=docs-bot/1.0
        EMBEDMD_COLOR_DIFF=false
    """

    model_config = SettingsConfigDict(
        env_prefix="EMBEDMD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Scanner configuration
    directive_marker: str = Field(
        default="[embedmd]:#",
        description="Prefix that marks a line as an embed directive",
    )

    fence_token: str = Field(
        default="```",
        description="Prefix that opens or closes a fenced code block",
    )

    # CLI configuration
    markdown_suffix: str = Field(
        default=".md",
        description="File suffix accepted by the command line tool",
    )

    color_diff: bool = Field(
        default=True,
        description="Allow colored diff output when writing to a terminal",
    )

    # Fetch configuration
    http_timeout: Optional[float] = Field(
        default=None,
        description="Timeout in seconds for remote fetches (None waits forever)",
    )

    user_agent: str = Field(
        default="embedmd/1.0.0",
        description="User-Agent header sent with remote fetches",
    )

    def directive_is(self, line: str) -> bool:
        """True if ``line`` starts with the directive marker."""
        return line.startswith(self.directive_marker)

    def fence_is(self, line: str) -> bool:
        """True if ``line`` opens or closes a fenced block."""
        return line.startswith(self.fence_token)

    def directiveArgs_extract(self, line: str) -> str:
        """
        Return the argument text that follows the directive marker.

        Args:
            line: A line for which directive_is() holds

        Returns:
            Everything after the marker, line terminator stripped

        Example:
            >>> settings = AppSettings()
            >>> settings.directiveArgs_extract('[embedmd]:# (code.go)\\n')
            ' (code.go)'
        """
        return line[len(self.directive_marker):].rstrip("\r\n")


# Singleton instance - import this in your code
appsettings = AppSettings()
