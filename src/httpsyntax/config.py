"""
=============================================================================
PARSER CONFIGURATION
=============================================================================

Centralized configuration for the request-syntax parser and its CLI.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m httpsyntax --line-ending crlf request.http      │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── HTTPSYNTAX_LINE_ENDING=crlf python -m httpsyntax          │
    │                                                                      │
    │   3. Default values (in this dataclass)                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The line delimiter is a single configured value. Documents are never
inspected to guess their line endings.

=============================================================================
"""

import logging
import os
import re
from dataclasses import dataclass


LINE_ENDINGS = {
    "lf": "\n",
    "crlf": "\r\n",
    "cr": "\r",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

VERSION_PATTERN = re.compile(r"HTTP/\S+")


def line_ending(name: str) -> str:
    """
    Map a line-ending name (lf, crlf, cr) to its delimiter.

    Raises:
        ValueError: For an unknown name.
    """
    try:
        return LINE_ENDINGS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown line ending: {name!r}. Expected one of {', '.join(LINE_ENDINGS)}."
        ) from None


@dataclass(frozen=True)
class ParserConfig:
    """
    Configuration for RequestParser.

    =========================================================================
    SETTINGS
    =========================================================================

        line_delimiter:     Splits the document into physical lines
        default_version:    Version used when the request line has none
        log_level:          Level the CLI configures logging with

    =========================================================================
    """

    line_delimiter: str = "\n"
    """
    Delimiter between physical lines. "\\n" for files written on Unix,
    "\\r\\n" for files written on Windows.
    """

    default_version: str = "HTTP/1.1"
    """HTTP version assumed when the request line does not name one."""

    log_level: str = "WARNING"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    DEBUG shows every state transition of the line classifier.
    """

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """
        Create configuration from environment variables.

            HTTPSYNTAX_LINE_ENDING  lf, crlf or cr (default: lf)
            HTTPSYNTAX_LOG_LEVEL    Logging level (default: WARNING)
        """
        return cls(
            line_delimiter=line_ending(os.getenv("HTTPSYNTAX_LINE_ENDING", "lf")),
            log_level=os.getenv("HTTPSYNTAX_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: On the first invalid setting.
        """
        if not self.line_delimiter:
            raise ValueError("line_delimiter must not be empty")

        if not VERSION_PATTERN.fullmatch(self.default_version):
            raise ValueError(
                f"Invalid default_version: {self.default_version!r}. Must look like HTTP/1.1."
            )

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level!r}. Must be one of {', '.join(LOG_LEVELS)}."
            )


def setup_logging(config: ParserConfig) -> None:
    """Configure logging for command-line use based on config."""
    level = getattr(logging, config.log_level.upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logging.getLogger("httpsyntax").setLevel(level)
