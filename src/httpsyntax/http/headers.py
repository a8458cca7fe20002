"""
=============================================================================
HEADER PARSER
=============================================================================

Validates header lines and collects them into a Headers mapping.

=============================================================================
HEADER FORMAT
=============================================================================

    field-name ":" OWS field-value OWS

    field-name:     One or more ASCII letters, "-" or "_"
    field-value:    ASCII letters, digits, space, tab and the punctuation
                    !"#$%&'()*+,-./:;<=>?@[]^_`{|}~
                    (no backslash, no control characters, no non-ASCII)

    The value may be empty ("X-Empty:"). Everything after the first colon
    belongs to the value, so "Host: example.com:8080" keeps its port.

The character sets are a deliberate restriction of this tool's grammar,
not a full RFC 9110 field-value implementation.

=============================================================================
REPEATED FIELDS (RFC 9110 Section 5.3)
=============================================================================

A field that appears more than once is combined into one value:

    Accept: text/html                    Accept: text/html, text/json
    Accept: text/json          ──►

    Cookie: a=1                          Cookie: a=1; b=2
    Cookie: b=2                ──►

Names are compared case-insensitively; the casing of the first occurrence
is the one kept:

    X-Trace: 1
    x-trace: 2                 ──►       X-Trace: 1, 2

=============================================================================
"""

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from typing import Dict, Optional, Union

from .errors import HTTPParseError, ParseErrorReason


logger = logging.getLogger(__name__)


FIELD_NAME_PATTERN = re.compile(r"[A-Za-z_-]+")

FIELD_VALUE_PUNCTUATION = " \t!\"#$%&'()*+,-./:;<=>?@[]^_`{|}~"
FIELD_VALUE_PATTERN = re.compile(
    "[A-Za-z0-9" + re.escape(FIELD_VALUE_PUNCTUATION) + "]*"
)

COOKIE_FIELD = "cookie"


def field_separator(name: str) -> str:
    """Separator character used when combining repeated name fields."""
    return ";" if name.lower() == COOKIE_FIELD else ","


def combine_field_values(name: str, existing: str, value: str) -> str:
    """
    Append value to an already combined field value.

    Both the existing and the new value are split on the separator and
    their items trimmed, so combining is order-preserving and never
    doubles separators or whitespace. Empty items are dropped.

        >>> combine_field_values("Accept", "a,b", "c")
        'a, b, c'
        >>> combine_field_values("Cookie", "a=1", "b=2")
        'a=1; b=2'
        >>> combine_field_values("Accept", "a", "b,c")
        'a, b, c'
    """
    separator = field_separator(name)
    items = [item.strip() for item in existing.split(separator)]
    items.extend(item.strip() for item in value.split(separator))
    return f"{separator} ".join(item for item in items if item)


class Headers(Mapping):
    """
    Ordered, read-only, case-insensitive header mapping.

    Keys keep the casing of their first occurrence; any casing finds them:

        headers = Headers([("Content-Type", "text/html")])
        headers["content-type"]        # "text/html"
        list(headers)                  # ["Content-Type"]

    Repeated names passed to the constructor are combined with
    combine_field_values(). Compares equal to a plain dict with the same
    canonical keys and values.
    """

    def __init__(self, fields: Union[Mapping, Iterable[tuple[str, str]], None] = None):
        self._values: Dict[str, str] = {}
        self._names: Dict[str, str] = {}  # lower-case name -> canonical name

        if fields is None:
            return
        if isinstance(fields, Mapping):
            fields = fields.items()
        for name, value in fields:
            self._add(name, value)

    def _add(self, name: str, value: str) -> None:
        key = name.lower()
        canonical = self._names.get(key)
        if canonical is None:
            self._names[key] = name
            self._values[name] = value
        else:
            self._values[canonical] = combine_field_values(
                canonical, self._values[canonical], value
            )

    def canonical_name(self, name: str) -> Optional[str]:
        """The stored casing for name, or None if absent."""
        return self._names.get(name.lower())

    def __getitem__(self, name: str) -> str:
        if not isinstance(name, str):
            raise KeyError(name)
        canonical = self._names.get(name.lower())
        if canonical is None:
            raise KeyError(name)
        return self._values[canonical]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def to_dict(self) -> Dict[str, str]:
        """Plain dict copy, canonical names as keys."""
        return dict(self._values)

    def __hash__(self) -> int:
        # Order-independent, like equality
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        return f"Headers({self._values!r})"


def parse_header_line(line: str) -> tuple[str, str]:
    """
    Split and validate one header line.

    Returns:
        (name, value) with the value trimmed.

    Raises:
        HTTPParseError: If the name or value has characters outside the
            allowed sets, or the line has no colon.
    """
    name, colon, value = line.partition(":")
    value = value.strip()

    if not colon or not FIELD_NAME_PATTERN.fullmatch(name):
        logger.debug(f"Rejected header field-name in line {line!r}")
        raise HTTPParseError(
            f"Header field-name is not valid: {name!r}",
            ParseErrorReason.INVALID_FIELD_NAME,
        )

    if not FIELD_VALUE_PATTERN.fullmatch(value):
        logger.debug(f"Rejected header field-value in line {line!r}")
        raise HTTPParseError(
            f"Header field-value is not valid: {value!r}",
            ParseErrorReason.INVALID_FIELD_VALUE,
        )

    return name, value


def parse_headers(lines: Iterable[str]) -> Headers:
    """
    Parse header lines into a Headers mapping.

    Stops at the first invalid line; no partial mapping is returned.
    """
    fields = [parse_header_line(line) for line in lines]
    headers = Headers(fields)
    logger.debug(f"Parsed {len(fields)} header lines into {len(headers)} fields")
    return headers
