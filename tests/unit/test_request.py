"""
Unit tests for HTTP request-syntax parsing.
"""

import textwrap
import threading

import pytest

from httpsyntax import ParserConfig
from httpsyntax.http.errors import HTTPParseError, ParseErrorReason
from httpsyntax.http.headers import Headers
from httpsyntax.http.methods import Method
from httpsyntax.http.request import HTTPRequest, RequestParser, parse_http_request


def message(text: str) -> str:
    """Dedent a document written inline and drop the surrounding newlines."""
    return textwrap.dedent(text).strip("\n")


def make_request(**overrides) -> HTTPRequest:
    """Helper to build an expected request."""
    fields = dict(
        method=Method.GET,
        pathname="/api/path",
        uri="https://mursu.dev/api/path",
        version="HTTP/1.1",
        headers=Headers(),
        body=None,
    )
    fields.update(overrides)
    if isinstance(fields["headers"], dict):
        fields["headers"] = Headers(fields["headers"])
    return HTTPRequest(**fields)


class TestRequestLine:
    """Tests for request-line handling through the full parser."""

    def test_request_without_request_line(self):
        """Test a document starting with a header is rejected."""
        text = message("""
            Host: example.com
            GET /api/path
        """)

        with pytest.raises(HTTPParseError) as exc_info:
            parse_http_request(text)

        assert exc_info.value.reason is ParseErrorReason.REQUEST_LINE
        assert "Request-line not starting with method" in str(exc_info.value)

    def test_empty_document(self):
        """Test an empty document has no request line."""
        with pytest.raises(HTTPParseError, match="Request-line not starting with method"):
            parse_http_request("")

    def test_parse_request_line(self):
        """Test a document with only a request line."""
        assert parse_http_request("GET https://mursu.dev/api/path") == make_request()

    def test_request_line_split_into_multiple_lines(self):
        """Test continuation lines rebuild the target."""
        text = message("""
            GET https://mursu.dev
                /path
                /to
                /endpoint
                ?query=asd
                &filter=false
        """)

        assert parse_http_request(text) == make_request(
            pathname="/path/to/endpoint?query=asd&filter=false",
            uri="https://mursu.dev/path/to/endpoint?query=asd&filter=false",
        )

    def test_split_target_equals_single_line(self):
        """Test splitting a target over lines does not change the result."""
        single = parse_http_request(
            "POST https://mursu.dev/a/b?c=1&d=2 HTTP/1.0\nContent-Type: text/plain\n\nx"
        )
        split = parse_http_request(message("""
            POST https://mursu.dev
              /a
              /b
              ?c=1
              &d=2 HTTP/1.0
            Content-Type: text/plain

            x
        """))

        assert split == single

    def test_request_line_with_query_strings(self):
        """Test query strings survive in pathname and uri."""
        request = parse_http_request("GET https://mursu.dev/path/to/endpoint?query=12345&filter=true")

        assert request.pathname == "/path/to/endpoint?query=12345&filter=true"
        assert request.uri == "https://mursu.dev/path/to/endpoint?query=12345&filter=true"

    @pytest.mark.parametrize("method", list(Method))
    def test_method_prefix(self, method: Method):
        """Test every method prefix is recognized."""
        request = parse_http_request(f"{method.value} https://mursu.dev/api/path")

        assert request.method is method

    def test_method_defaults_to_get(self):
        """Test a request line without method is a GET."""
        request = parse_http_request("https://mursu.dev/api/path")

        assert request.method is Method.GET
        assert request.uri == "https://mursu.dev/api/path"

    def test_version_not_set(self):
        """Test the default version."""
        request = parse_http_request("GET /api/path\nHost: 127.0.0.1:8000")

        assert request == make_request(
            headers={"Host": "127.0.0.1:8000"},
            uri="http://127.0.0.1:8000/api/path",
        )

    def test_version_set(self):
        """Test an explicit version."""
        request = parse_http_request("GET /api/path HTTP/1.0\nHost: 127.0.0.1:8000")

        assert request.version == "HTTP/1.0"
        assert request.pathname == "/api/path"

    def test_configured_default_version(self):
        """Test the default version comes from config."""
        request = parse_http_request(
            "GET https://mursu.dev/api/path",
            ParserConfig(default_version="HTTP/2"),
        )

        assert request.version == "HTTP/2"


class TestTargetResolution:
    """Tests for relative targets resolved against Host."""

    @pytest.mark.parametrize(
        "host, uri",
        [
            ("example.com", "http://example.com/path/to/endpoint"),
            ("example.com:443", "https://example.com/path/to/endpoint"),
            ("example.com:8443", "https://example.com/path/to/endpoint"),
            ("example.com:80", "http://example.com/path/to/endpoint"),
            ("example.com:1234", "http://example.com:1234/path/to/endpoint"),
        ],
    )
    def test_relative_uri_with_host(self, host: str, uri: str):
        """Test scheme selection and port stripping."""
        request = parse_http_request(f"GET /path/to/endpoint\nHost: {host}")

        assert request == make_request(
            pathname="/path/to/endpoint",
            uri=uri,
            headers={"Host": host},
        )

    def test_host_header_any_case(self):
        """Test the Host header is found regardless of its casing."""
        request = parse_http_request("GET /api/path\nhost: mursu.dev")

        assert request.uri == "http://mursu.dev/api/path"
        assert list(request.headers) == ["host"]

    def test_relative_uri_without_host(self):
        """Test a relative target without Host is rejected."""
        with pytest.raises(HTTPParseError) as exc_info:
            parse_http_request("GET /api/path")

        assert exc_info.value.reason is ParseErrorReason.HOST_REQUIRED
        assert "Host header is required for relative URI" in str(exc_info.value)


class TestHeaders:
    """Tests for header handling through the full parser."""

    def test_parse_header(self):
        """Test a single header."""
        request = parse_http_request("GET https://mursu.dev/api/path\napi-key: 12345")

        assert request == make_request(headers={"api-key": "12345"})

    def test_header_without_value(self):
        """Test an empty header value."""
        request = parse_http_request("GET http://mursu.dev/api/path\nExample-Field:")

        assert request.headers == {"Example-Field": ""}

    def test_repeated_header(self):
        """Test repeated fields are combined with commas."""
        text = message("""
            GET http://mursu.dev/api/path
            Example-Field: Foo, Bar
            Example-Field: Baz
        """)

        assert parse_http_request(text).headers == {"Example-Field": "Foo, Bar, Baz"}

    def test_repeated_cookie_header(self):
        """Test repeated cookies are combined with semicolons."""
        text = message("""
            GET http://mursu.dev/api/path
            Cookie: name=value
            Cookie: name2=value2
        """)

        assert parse_http_request(text).headers == {"Cookie": "name=value; name2=value2"}

    def test_non_ascii_field_name(self):
        """Test a non-ASCII header name is rejected."""
        with pytest.raises(HTTPParseError) as exc_info:
            parse_http_request("GET http://mursu.dev/api/path\n♫: Musical note")

        assert exc_info.value.reason is ParseErrorReason.INVALID_FIELD_NAME

    def test_non_ascii_field_value(self):
        """Test a non-ASCII header value is rejected."""
        with pytest.raises(HTTPParseError) as exc_info:
            parse_http_request("GET http://mursu.dev/api/path\nExample-Field: ♫")

        assert exc_info.value.reason is ParseErrorReason.INVALID_FIELD_VALUE

    def test_request_line_error_before_header_error(self):
        """Test a bad request line is reported ahead of a bad header."""
        with pytest.raises(HTTPParseError) as exc_info:
            parse_http_request("PATCH /x\nBad Name: v")

        assert exc_info.value.reason is ParseErrorReason.REQUEST_LINE

    def test_repeated_header_with_several_items(self):
        """Test a repeat carrying several items is normalized like the rest."""
        request = parse_http_request("GET /a\nHost: x\nAccept: a\nAccept: b,c")

        assert request.headers["Accept"] == "a, b, c"

    def test_header_error_before_host_error(self):
        """Test the first failing step is the one reported."""
        with pytest.raises(HTTPParseError) as exc_info:
            parse_http_request("GET /api\nBad Name: x")

        assert exc_info.value.reason is ParseErrorReason.INVALID_FIELD_NAME


class TestBody:
    """Tests for body handling through the full parser."""

    def test_single_line_body(self):
        """Test a one-line body."""
        text = message("""
            POST http://mursu.dev/posts
            Content-Type: application/json

            { "foo": "bar" }
        """)

        assert parse_http_request(text) == make_request(
            method=Method.POST,
            pathname="/posts",
            uri="http://mursu.dev/posts",
            headers={"Content-Type": "application/json"},
            body='{ "foo": "bar" }',
        )

    def test_multiline_body(self):
        """Test a pretty-printed body collapses to one line."""
        text = message("""
            POST http://mursu.dev/posts
            Content-Type: application/json

            {
              "foo": "bar",
              "bar": 123
            }
        """)

        assert parse_http_request(text).body == '{ "foo": "bar", "bar": 123 }'

    def test_body_without_content_type(self):
        """Test a body with no Content-Type is rejected."""
        text = message("""
            POST http://mursu.dev/posts

            { "foo": "bar" }
        """)

        with pytest.raises(HTTPParseError) as exc_info:
            parse_http_request(text)

        assert exc_info.value.reason is ParseErrorReason.MISSING_CONTENT_TYPE
        assert "No Content-Type header set for body" in str(exc_info.value)

    def test_no_body_needs_no_content_type(self):
        """Test a trailing blank line does not create a body."""
        request = parse_http_request("DELETE https://mursu.dev/posts/1\nAccept: */*\n\n")

        assert request.body is None
        assert request.has_body is False

    def test_comments_ignored(self):
        """Test comments are dropped from every section."""
        text = message("""
            // This is a comment
            POST http://mursu.dev/posts
            Content-Type: application/json
            // This is also a comment
            Example-Field: value

            {
              "foo": "bar",
              // Comments also work in body section
              "bar": 123
            }
        """)

        assert parse_http_request(text) == make_request(
            method=Method.POST,
            pathname="/posts",
            uri="http://mursu.dev/posts",
            headers={
                "Content-Type": "application/json",
                "Example-Field": "value",
            },
            body='{ "foo": "bar", "bar": 123 }',
        )


class TestHTTPRequest:
    """Tests for HTTPRequest dataclass."""

    def test_accessors(self, sample_post_request: str):
        """Test convenience accessors on a parsed request."""
        request = parse_http_request(sample_post_request)

        assert request.method == "POST"
        assert request.pathname == "/api/users?notify=true"
        assert request.uri == "https://example.com/api/users?notify=true"
        assert request.content_type == "application/json"
        assert request.get_header("COOKIE") == "session=abc; theme=dark"
        assert request.get_header("X-Missing", "default") == "default"
        assert request.body == '{ "name": "John", "email": "john@example.com" }'

    def test_host_property(self, sample_get_request: str):
        """Test the host accessor."""
        request = parse_http_request(sample_get_request)

        assert request.host == "localhost:8080"
        assert request.uri == "http://localhost:8080/api/users?page=1&limit=10"
        assert request.body is None

    def test_content_type_parameters_stripped(self):
        """Test content_type drops parameters."""
        request = make_request(headers={"Content-Type": "Application/JSON; charset=utf-8"})

        assert request.content_type == "application/json"
        assert make_request().content_type is None

    def test_immutable(self):
        """Test the request cannot be modified."""
        request = make_request()

        with pytest.raises(AttributeError):
            request.uri = "https://other.example/"

    def test_hashable(self):
        """Test equal requests hash equal."""
        first = parse_http_request("GET /api/path\nHost: mursu.dev")
        second = parse_http_request("GET /api/path\nHost: mursu.dev")

        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_to_dict(self):
        """Test the JSON-ready representation."""
        request = parse_http_request("GET /api/path\nHost: 127.0.0.1:8000")

        assert request.to_dict() == {
            "method": "GET",
            "pathname": "/api/path",
            "uri": "http://127.0.0.1:8000/api/path",
            "version": "HTTP/1.1",
            "headers": {"Host": "127.0.0.1:8000"},
            "body": None,
        }


class TestRequestParser:
    """Tests for RequestParser class."""

    def test_crlf_delimiter(self):
        """Test a CRLF document with a matching config."""
        parser = RequestParser(ParserConfig(line_delimiter="\r\n"))
        request = parser.parse(
            "POST /posts\r\nHost: mursu.dev\r\nContent-Type: text/plain\r\n\r\nhello\r\nworld"
        )

        assert request.uri == "http://mursu.dev/posts"
        assert request.body == "hello world"

    def test_invalid_config_rejected(self):
        """Test configuration is validated up front."""
        with pytest.raises(ValueError):
            RequestParser(ParserConfig(line_delimiter=""))

    def test_parser_reusable(self, parser: RequestParser, sample_get_request: str):
        """Test one parser handles several documents independently."""
        first = parser.parse(sample_get_request)
        second = parser.parse("GET https://mursu.dev/api/path")

        assert first.headers["user-agent"] == "pytest"
        assert second.headers == {}

    def test_concurrent_parsing(self, parser: RequestParser, sample_post_request: str):
        """Test a shared parser from several threads."""
        expected = parser.parse(sample_post_request)
        results = []

        def worker():
            for _ in range(50):
                results.append(parser.parse(sample_post_request))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 200
        assert all(result == expected for result in results)
