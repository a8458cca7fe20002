"""
=============================================================================
PARSE ERRORS
=============================================================================

Every failure of the parser surfaces as a single exception type,
HTTPParseError, distinguished by a reason code:

    ┌───────────────────────┬───────────────────────────────────────────────┐
    │ Reason                │ Raised when                                   │
    ├───────────────────────┼───────────────────────────────────────────────┤
    │ REQUEST_LINE          │ No request line, or it is not one at all      │
    │ HOST_REQUIRED         │ Relative target without a usable Host header  │
    │ INVALID_FIELD_NAME    │ Header name has disallowed characters         │
    │ INVALID_FIELD_VALUE   │ Header value has disallowed characters        │
    │ MISSING_CONTENT_TYPE  │ Body present but no Content-Type header       │
    └───────────────────────┴───────────────────────────────────────────────┘

There is no recovery inside the parser: the first error aborts the parse.

=============================================================================
"""

from enum import Enum


class ParseErrorReason(str, Enum):
    """Discriminant carried by HTTPParseError."""

    REQUEST_LINE = "request-line"
    HOST_REQUIRED = "host-required"
    INVALID_FIELD_NAME = "invalid-field-name"
    INVALID_FIELD_VALUE = "invalid-field-value"
    MISSING_CONTENT_TYPE = "missing-content-type"


class HTTPParseError(ValueError):
    """
    Raised when a request-syntax document cannot be parsed.

    Carries the reason so callers can branch without matching on the
    message text:

        try:
            request = parse_http_request(text)
        except HTTPParseError as e:
            if e.reason is ParseErrorReason.HOST_REQUIRED:
                ...
    """

    def __init__(self, message: str, reason: ParseErrorReason = ParseErrorReason.REQUEST_LINE):
        super().__init__(message)
        self.message = message
        self.reason = reason

    def __repr__(self) -> str:
        return f"HTTPParseError({self.message!r}, reason={self.reason.value!r})"
