"""
=============================================================================
HTTPSYNTAX - Parser for IDE-style HTTP request files
=============================================================================

Turns a hand-written HTTP request, as found in ".http" files of IDE HTTP
clients, into a structured request object.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   GET /api/path                      HTTPRequest(                   │
    │   Host: 127.0.0.1:8000      ──►         method=GET,                 │
    │                                         pathname="/api/path",       │
    │                                         uri="http://127.0.0.1:8000  │
    │                                              /api/path",            │
    │                                         version="HTTP/1.1",         │
    │                                         headers={"Host": ...},      │
    │                                         body=None)                  │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    httpsyntax/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m httpsyntax)
    ├── config.py            # ParserConfig dataclass, logging setup
    └── http/
        ├── errors.py        # HTTPParseError, ParseErrorReason
        ├── methods.py       # Method enum
        ├── lines.py         # Line classifier state machine
        ├── request_line.py  # Request-line split and URI resolution
        ├── headers.py       # Header validation and combination
        ├── body.py          # Body assembly
        └── request.py       # HTTPRequest, RequestParser

=============================================================================
QUICK START
=============================================================================

    from httpsyntax import parse_http_request, HTTPParseError

    request = parse_http_request(
        "POST https://example.com/posts\\n"
        "Content-Type: application/json\\n"
        "\\n"
        '{ "title": "Hello" }'
    )
    request.method        # Method.POST
    request.uri           # "https://example.com/posts"
    request.body          # '{ "title": "Hello" }'

=============================================================================
"""

__version__ = "1.0.0"

from .config import ParserConfig
from .http import (
    Headers,
    HTTPParseError,
    HTTPRequest,
    Method,
    ParseErrorReason,
    RequestParser,
    parse_http_request,
)

__all__ = [
    "Headers",
    "HTTPParseError",
    "HTTPRequest",
    "Method",
    "ParseErrorReason",
    "ParserConfig",
    "RequestParser",
    "parse_http_request",
    "__version__",
]
