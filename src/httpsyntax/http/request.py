"""
=============================================================================
HTTP REQUEST SYNTAX PARSER
=============================================================================

Parses a human-authored request-syntax document, the format IDE HTTP
clients use for ".http" files, into a structured HTTPRequest.

=============================================================================
DOCUMENT ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     REQUEST-SYNTAX DOCUMENT                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │  // Create a post                          <- comment, dropped      │
    │  POST https://example.com                  <- request line          │
    │      /posts                                <- continuation          │
    │      ?draft=true                           <- continuation          │
    │  Content-Type: application/json            <- header                │
    │  Cookie: session=abc                       <- header                │
    │                                            <- blank: body follows   │
    │  {                                                                   │
    │    "title": "Hello"                        <- body lines            │
    │  }                                                                   │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

    HTTPRequest(
        method=Method.POST,
        pathname="/posts?draft=true",
        uri="https://example.com/posts?draft=true",
        version="HTTP/1.1",
        headers={"Content-Type": "application/json", "Cookie": "session=abc"},
        body='{ "title": "Hello" }',
    )

=============================================================================
PIPELINE
=============================================================================

        Document text
              │
              ▼
        ┌───────────────────────────────────────────────────────────────────┐
        │  1. Classify lines ─────────► request line / headers / body      │
        │  2. Split request line ─────► method, target, version            │
        │  3. Parse headers ──────────► Headers (Host, Content-Type, ...)  │
        │  4. Resolve target ─────────► pathname, absolute uri  (uses Host)│
        │  5. Assemble body ──────────► body  (needs Content-Type)         │
        │  6. Build HTTPRequest                                            │
        └───────────────────────────────────────────────────────────────────┘

    The request line is split before the headers are parsed, so a document
    that starts with a header is reported as a missing request line rather
    than as a bad header. The first error of any step ends the parse.

=============================================================================
INTERVIEW QUESTIONS ABOUT THIS PARSER
=============================================================================

Q: "Why is the comment state kept on a stack?"
A: "A comment can interrupt any section. Pushing COMMENT on top of the
   current state and popping it when the comments end restores the
   section without a separate 'previous state' flag."

Q: "Why is a relative target an error without a Host header?"
A: "The result always carries an absolute URI. Without Host there is
   nothing to resolve '/path' against, and guessing would hide a mistake
   in the document."

=============================================================================
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..config import ParserConfig
from .body import assemble_body
from .errors import HTTPParseError, ParseErrorReason
from .headers import Headers, parse_headers
from .lines import LineClassifier
from .methods import Method
from .request_line import DEFAULT_VERSION, resolve_target, split_request_line


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTTPRequest:
    """
    A parsed request. Immutable once constructed.

    =========================================================================
    ATTRIBUTES
    =========================================================================

        method:     Method enum member; GET when the document names none
        pathname:   Path plus query string, "/api/users?page=1"
        uri:        Absolute URI, "https://example.com/api/users?page=1"
        version:    "HTTP/1.1" unless the request line names another
        headers:    Headers mapping, case-insensitive lookups
        body:       Body string, or None when the document has no body

    =========================================================================
    """

    method: Method
    pathname: str
    uri: str
    version: str = DEFAULT_VERSION
    headers: Headers = field(default_factory=Headers)
    body: Optional[str] = None

    @property
    def host(self) -> str:
        """Host header value, empty if not set."""
        return self.headers.get("host", "")

    @property
    def content_type(self) -> Optional[str]:
        """
        Media type of the Content-Type header, without parameters.

        "application/json; charset=utf-8" -> "application/json"
        """
        content_type = self.headers.get("content-type", "")
        return content_type.split(";")[0].strip().lower() or None

    @property
    def has_body(self) -> bool:
        return self.body is not None

    def get_header(self, name: str, default: str = "") -> str:
        """Get a header value (case-insensitive lookup)."""
        return self.headers.get(name, default)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        return {
            "method": self.method.value,
            "pathname": self.pathname,
            "uri": self.uri,
            "version": self.version,
            "headers": self.headers.to_dict(),
            "body": self.body,
        }


class RequestParser:
    """
    Parses request-syntax documents into HTTPRequest objects.

    Holds only its (frozen) configuration, so one instance can serve any
    number of threads.

        parser = RequestParser(ParserConfig(line_delimiter="\\r\\n"))
        request = parser.parse(text)
    """

    def __init__(self, config: Optional[ParserConfig] = None):
        """
        Args:
            config: Parser settings. Validated here so a bad setting fails
                    before the first document is parsed.
        """
        self.config = config or ParserConfig()
        self.config.validate()
        self._classifier = LineClassifier(self.config.line_delimiter)

    def parse(self, message: str) -> HTTPRequest:
        """
        Parse one request-syntax document.

        Args:
            message: The full document text.

        Returns:
            Parsed HTTPRequest.

        Raises:
            HTTPParseError: On the first invalid part of the document.
        """
        groups = self._classifier.classify(message)

        request_line = split_request_line(
            groups.request_line,
            default_version=self.config.default_version,
        )

        headers = parse_headers(groups.header_lines)

        target = resolve_target(request_line.target, headers.get("host"))

        body = assemble_body(groups.body_lines, headers.get("content-type"))

        request = HTTPRequest(
            method=request_line.method,
            pathname=target.pathname,
            uri=target.uri,
            version=request_line.version,
            headers=headers,
            body=body,
        )
        logger.debug(f"Parsed {request.method.value} {request.uri}")
        return request


# =============================================================================
# CONVENIENCE FUNCTION
# =============================================================================

def parse_http_request(message: str, config: Optional[ParserConfig] = None) -> HTTPRequest:
    """
    Parse a request-syntax document in one call.

    Creates a RequestParser and parses the message. Use RequestParser
    directly to parse many documents with the same settings.

    Args:
        message: The full document text.
        config: Parser settings, defaults to ParserConfig().

    Returns:
        Parsed HTTPRequest.

    Raises:
        HTTPParseError: If the document is malformed.
    """
    return RequestParser(config).parse(message)


__all__ = [
    "HTTPRequest",
    "HTTPParseError",
    "ParseErrorReason",
    "RequestParser",
    "parse_http_request",
]
