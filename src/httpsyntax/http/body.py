"""
Body assembly.

Everything after the blank line that ends the headers is the body. The
lines are joined with a single space, so a pretty-printed JSON document

    {
      "foo": "bar"
    }

becomes the one-line body '{ "foo": "bar" }'. This is an authoring
convenience of the request-syntax format, not a whitespace-preserving body
reader.
"""

import logging
from typing import Iterable, Optional

from .errors import HTTPParseError, ParseErrorReason


logger = logging.getLogger(__name__)


def assemble_body(lines: Iterable[str], content_type: Optional[str] = None) -> Optional[str]:
    """
    Join body lines into the request body.

    Args:
        lines: Body lines from the classifier.
        content_type: Value of the Content-Type header, if any.

    Returns:
        The body, or None when there are no (non-blank) body lines.

    Raises:
        HTTPParseError: If there is a body but no Content-Type.
    """
    lines = list(lines)
    if not any(lines):
        return None

    if not content_type:
        raise HTTPParseError(
            "No Content-Type header set for body",
            ParseErrorReason.MISSING_CONTENT_TYPE,
        )

    body = " ".join(lines).strip()
    logger.debug(f"Assembled {len(body)} character body from {len(lines)} lines")
    return body
