"""
=============================================================================
REQUEST-SYNTAX PARSING
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │ LINE CLASSIFIER (lines.py)                                          │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Splits the document into request line, header lines, body lines.    │
    │ Drops comments, joins continuation lines.                           │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST-LINE PARSER (request_line.py)                               │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Method, target and version; makes the target an absolute URI.      │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ HEADER PARSER (headers.py)                                          │
    │ ─────────────────────────────────────────────────────────────────── │
    │ Validates fields, combines repeats, case-insensitive Headers map.  │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ BODY ASSEMBLER (body.py)                                            │
    │ ─────────────────────────────────────────────────────────────────── │
    │ One-line body; requires a Content-Type header.                     │
    └─────────────────────────────────────────────────────────────────────┘

    ┌─────────────────────────────────────────────────────────────────────┐
    │ REQUEST ASSEMBLER (request.py)                                      │
    │ ─────────────────────────────────────────────────────────────────── │
    │ RequestParser / parse_http_request -> HTTPRequest                  │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .errors import HTTPParseError, ParseErrorReason
from .methods import Method
from .headers import Headers, parse_headers
from .lines import LineClassifier, LineGroups, ParseState, classify_lines
from .request_line import RequestLine, ResolvedTarget, split_request_line, resolve_target
from .body import assemble_body
from .request import HTTPRequest, RequestParser, parse_http_request

__all__ = [
    # Errors
    "HTTPParseError",
    "ParseErrorReason",

    # Data model
    "Method",
    "Headers",
    "HTTPRequest",

    # Line classification
    "LineClassifier",
    "LineGroups",
    "ParseState",
    "classify_lines",

    # Components
    "RequestLine",
    "ResolvedTarget",
    "split_request_line",
    "resolve_target",
    "parse_headers",
    "assemble_body",

    # Parser
    "RequestParser",
    "parse_http_request",
]
