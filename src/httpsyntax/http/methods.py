"""
=============================================================================
HTTP METHODS (RFC 9110 Section 9)
=============================================================================

The request methods a request-syntax document may start with.

    ┌──────────┬──────────────────────────────────────────────────────────┐
    │  Method  │ Description                                              │
    ├──────────┼──────────────────────────────────────────────────────────┤
    │  GET     │ Retrieve resource (default when no method is written)    │
    │  HEAD    │ GET without body                                         │
    │  POST    │ Submit data                                              │
    │  PUT     │ Replace resource                                         │
    │  DELETE  │ Delete resource                                          │
    │  CONNECT │ Establish tunnel                                         │
    │  OPTIONS │ Get allowed methods                                      │
    │  TRACE   │ Echo request                                             │
    └──────────┴──────────────────────────────────────────────────────────┘

PATCH is not part of the RFC 9110 method registry and is therefore not
recognized as a method prefix: "PATCH /x" is read as a GET whose target is
the whole line, which then fails target validation.

=============================================================================
"""

from enum import Enum


class Method(str, Enum):
    """
    HTTP request method.

    Extends str so members compare equal to plain strings:

        >>> Method.GET == "GET"
        True
        >>> Method("POST")
        <Method.POST: 'POST'>
    """

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """All method tokens in declaration order."""
        return tuple(member.value for member in cls)


DEFAULT_METHOD = Method.GET
