"""
=============================================================================
REQUEST-LINE PARSER
=============================================================================

Decomposes the reconstructed request line and turns its target into an
absolute URI.

=============================================================================
REQUEST LINE FORMAT
=============================================================================

    [METHOD SP] TARGET [SP HTTP/VERSION]

    Examples:
        GET https://example.com/api/users HTTP/1.1
        POST /api/users
        https://example.com/health          (method defaults to GET)

    Both the method and the version are optional. A missing method means
    GET, a missing version means HTTP/1.1.

=============================================================================
TARGET RESOLUTION
=============================================================================

    ┌─────────────────────────────┬────────────────────────────────────────┐
    │ Target / Host               │ uri                                    │
    ├─────────────────────────────┼────────────────────────────────────────┤
    │ https://Example.com         │ https://example.com/                   │
    │ /a  + Host: example.com     │ http://example.com/a                   │
    │ /a  + Host: example.com:80  │ http://example.com/a                   │
    │ /a  + Host: example.com:443 │ https://example.com/a                  │
    │ /a  + Host: example.com:8443│ https://example.com/a                  │
    │ /a  + Host: example.com:1234│ http://example.com:1234/a              │
    │ /a  (no Host)               │ HTTPParseError (HOST_REQUIRED)         │
    └─────────────────────────────┴────────────────────────────────────────┘

The returned uri is always absolute; anything that cannot be made into one
is rejected.

=============================================================================
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import SplitResult, urlsplit, urlunsplit

from .errors import HTTPParseError, ParseErrorReason
from .methods import DEFAULT_METHOD, Method


logger = logging.getLogger(__name__)


DEFAULT_VERSION = "HTTP/1.1"

METHOD_PREFIX_PATTERN = re.compile(rf"^({'|'.join(Method.names())})\s+(.*)$")
VERSION_SUFFIX_PATTERN = re.compile(r"\s+(HTTP/\S+)$")

HOST_PORT_PATTERN = re.compile(r":(\d+)$")
STRIPPED_PORT_PATTERN = re.compile(r":(?:443|8443|80)$")
HTTPS_PORTS = ("443", "8443")

DEFAULT_PORTS = {"http": 80, "https": 443, "ws": 80, "wss": 443}


@dataclass(frozen=True)
class RequestLine:
    """Method, raw target and version of a request line."""

    method: Method
    target: str
    version: str = DEFAULT_VERSION


@dataclass(frozen=True)
class ResolvedTarget:
    """
    A target made absolute.

    pathname:   Path plus "?query" as it goes on the wire
    uri:        Full absolute URI
    """

    pathname: str
    uri: str


def split_request_line(line: str, default_version: str = DEFAULT_VERSION) -> RequestLine:
    """
    Split a request line into method, target and version.

    Args:
        line: Request line with all continuation fragments joined.
        default_version: Version used when the line carries none.

    Returns:
        RequestLine.

    Raises:
        HTTPParseError: If the line is empty, or has no method and its
            target is neither absolute nor origin-form. This is what a
            document starting with a header line looks like.
    """
    line = line.strip()
    if not line:
        raise HTTPParseError("Request-line not starting with method: empty request line")

    match = METHOD_PREFIX_PATTERN.match(line)
    if match:
        method = Method(match.group(1))
        target = match.group(2)
    else:
        method = DEFAULT_METHOD
        target = line

    target = target.strip()

    version = default_version
    version_match = VERSION_SUFFIX_PATTERN.search(target)
    if version_match:
        version = version_match.group(1)
        target = target[:version_match.start()].strip()

    if not match and not (target.startswith("/") or _split_absolute(target)):
        logger.debug(f"Rejected request line: {line!r}")
        raise HTTPParseError(f"Request-line not starting with method: {line!r}")

    return RequestLine(method=method, target=target, version=version)


def resolve_target(target: str, host: Optional[str] = None) -> ResolvedTarget:
    """
    Resolve a request target into a pathname and an absolute URI.

    Absolute targets are normalized on their own. Origin-form targets
    ("/path?query") are combined with the Host header value; the scheme is
    picked from the port written in the host.

    Args:
        target: Raw target from the request line.
        host: Value of the Host header, if any.

    Returns:
        ResolvedTarget.

    Raises:
        HTTPParseError: If the target has whitespace in it, is relative
            without a usable Host value, or is neither absolute nor
            origin-form.
    """
    if not target or any(char.isspace() for char in target):
        raise HTTPParseError(f"Request-line target is not a valid URI: {target!r}")

    parts = _split_absolute(target)
    if parts is not None:
        return _normalize_absolute(parts)

    pathname = target

    if not host:
        raise HTTPParseError(
            "Host header is required for relative URI",
            ParseErrorReason.HOST_REQUIRED,
        )

    if not pathname.startswith("/"):
        raise HTTPParseError(f"Request-line target is not a valid URI: {target!r}")

    port_match = HOST_PORT_PATTERN.search(host)
    scheme = "https" if port_match and port_match.group(1) in HTTPS_PORTS else "http"
    authority = STRIPPED_PORT_PATTERN.sub("", host)

    uri = f"{scheme}://{authority}{pathname}"
    if re.search(r"[/?#\s]", authority) or _split_absolute(uri) is None:
        raise HTTPParseError(
            f"Host header is not usable for relative URI: {host!r}",
            ParseErrorReason.HOST_REQUIRED,
        )

    logger.debug(f"Resolved relative target {target!r} against host {host!r}: {uri}")
    return ResolvedTarget(pathname=pathname, uri=uri)


def _split_absolute(target: str) -> Optional[SplitResult]:
    """Split target as an absolute URI, or None when it is not one."""
    try:
        parts = urlsplit(target)
        # Raises ValueError on a non-numeric or out-of-range port
        parts.port
    except ValueError:
        return None

    if not parts.scheme or not parts.netloc or not parts.hostname:
        return None
    return parts


def _normalize_absolute(parts: SplitResult) -> ResolvedTarget:
    """
    Normalize an absolute URI the way a browser URL parser would:
    lower-case scheme and host, drop the scheme's default port, use "/" for
    an empty path.
    """
    scheme = parts.scheme.lower()

    host = parts.hostname
    if ":" in host:
        host = f"[{host}]"  # IPv6 literal

    userinfo, _, _ = parts.netloc.rpartition("@")
    netloc = f"{userinfo}@{host}" if userinfo else host

    if parts.port is not None and DEFAULT_PORTS.get(scheme) != parts.port:
        netloc = f"{netloc}:{parts.port}"

    path = parts.path or "/"
    pathname = f"{path}?{parts.query}" if parts.query else path
    uri = urlunsplit((scheme, netloc, path, parts.query, parts.fragment))

    return ResolvedTarget(pathname=pathname, uri=uri)
