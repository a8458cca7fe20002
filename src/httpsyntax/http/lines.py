"""
=============================================================================
LINE CLASSIFIER
=============================================================================

Splits a request-syntax document into the three groups the rest of the
parser works on: request-line fragments, header lines and body lines.

=============================================================================
STATE MACHINE
=============================================================================

    ┌──────────────┐  non-blank   ┌──────────┐   blank    ┌──────────┐
    │ REQUEST_LINE │ ───────────► │  HEADER  │ ─────────► │   BODY   │
    └──────┬───────┘              └──────────┘            └──────────┘
           │  ▲                                                 ▲
           │  │ continuation (/ ? &)                            │
           └──┘                                                 │
           │                          blank                     │
           └────────────────────────────────────────────────────┘

    COMMENT is an overlay: a "//" line pushes it on top of whatever state
    is active, and the first line that is not a comment pops it again.
    That line is then handled by the restored state in the same pass.

    state stack:   [REQUEST_LINE]            "GET https://example.com"
                   [REQUEST_LINE, COMMENT]   "// list the users"
                   [REQUEST_LINE]            "    /users"   (reprocessed)

The decision to leave a state is made by looking at the following line,
skipping comment lines, so a comment between two sections never changes
which transition is taken.

=============================================================================
LONG REQUEST LINES
=============================================================================

A long target may be broken over several physical lines as long as each
continuation starts with "/", "?" or "&":

    GET https://example.com
        /path/to/endpoint
        ?query=value
        &filter=false

Every fragment is trimmed and the fragments are concatenated with no
separator, giving back:

    GET https://example.com/path/to/endpoint?query=value&filter=false

=============================================================================
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


logger = logging.getLogger(__name__)


COMMENT_PATTERN = re.compile(r"^//")
CONTINUATION_PATTERN = re.compile(r"^\s*[&?/]")


class ParseState(Enum):
    """States of the line classifier."""

    COMMENT = auto()
    REQUEST_LINE = auto()
    HEADER = auto()
    BODY = auto()


@dataclass(frozen=True)
class LineGroups:
    """
    Output of the classifier.

    request_line:   All request-line fragments joined into one string
    header_lines:   Raw header lines in document order
    body_lines:     Body lines in document order, blank lines included
    """

    request_line: str
    header_lines: tuple[str, ...] = ()
    body_lines: tuple[str, ...] = ()


def is_comment(line: str) -> bool:
    return COMMENT_PATTERN.match(line) is not None


def is_continuation(line: str) -> bool:
    return CONTINUATION_PATTERN.match(line) is not None


class LineClassifier:
    """
    Drives the line-classification state machine over one document.

    The classifier keeps no state between calls; every call to classify()
    works on local buffers only.
    """

    def __init__(self, delimiter: str = "\n"):
        if not delimiter:
            raise ValueError("Line delimiter must not be empty")
        self.delimiter = delimiter

    def split(self, message: str) -> list[str]:
        """Split into physical lines, each trimmed of surrounding whitespace."""
        return [line.strip() for line in message.split(self.delimiter)]

    def classify(self, message: str) -> LineGroups:
        """
        Classify every line of the document.

        Args:
            message: The whole request-syntax document.

        Returns:
            LineGroups with the request line, header lines and body lines.
            Comment lines are dropped wherever they appear.
        """
        lines = self.split(message)

        fragments: list[str] = []
        header_lines: list[str] = []
        body_lines: list[str] = []

        # Depth never exceeds two: a section state plus an optional COMMENT
        states = [ParseState.REQUEST_LINE]
        index = 0

        while index < len(lines):
            line = lines[index]
            state = states[-1]

            # -----------------------------------------------------------------
            # Comment overlay
            # -----------------------------------------------------------------
            if is_comment(line):
                if state is not ParseState.COMMENT:
                    states.append(ParseState.COMMENT)
                index += 1
                continue

            if state is ParseState.COMMENT:
                states.pop()
                # Same line again, under the restored state
                continue

            index += 1

            # -----------------------------------------------------------------
            # Section states
            # -----------------------------------------------------------------
            if state is ParseState.REQUEST_LINE:
                if not line and not fragments:
                    continue

                fragments.append(line)

                following = self._peek(lines, index)
                if following is None or is_continuation(lines[following]):
                    continue

                if lines[following]:
                    self._transition(states, ParseState.HEADER)
                else:
                    # Blank line starts the body; it is not part of it
                    index = following + 1
                    self._transition(states, ParseState.BODY)

            elif state is ParseState.HEADER:
                header_lines.append(line)

                following = self._peek(lines, index)
                if following is not None and not lines[following]:
                    index = following + 1
                    self._transition(states, ParseState.BODY)

            else:
                body_lines.append(line)

        groups = LineGroups(
            request_line="".join(fragments),
            header_lines=tuple(header_lines),
            body_lines=tuple(body_lines),
        )
        logger.debug(
            f"Classified {len(lines)} lines: {len(fragments)} request-line fragments, "
            f"{len(header_lines)} header lines, {len(body_lines)} body lines"
        )
        return groups

    @staticmethod
    def _peek(lines: list[str], start: int) -> Optional[int]:
        """Index of the next non-comment line at or after start, if any."""
        for index in range(start, len(lines)):
            if not is_comment(lines[index]):
                return index
        return None

    @staticmethod
    def _transition(states: list[ParseState], target: ParseState) -> None:
        logger.debug(f"{states[-1].name} -> {target.name}")
        states[-1] = target


def classify_lines(message: str, delimiter: str = "\n") -> LineGroups:
    """Convenience wrapper around LineClassifier.classify()."""
    return LineClassifier(delimiter).classify(message)
