"""
Unit tests for HTTP request parsing.
"""

import pytest

from minihttp.http.request import (
    HTTPRequest,
    RequestParser,
    parse_request,
)


class TestRequestParser:
    """Tests for RequestParser class."""

    def test_parse_simple_get(self, sample_get_request: bytes):
        """Test parsing a simple GET request."""
        parser = RequestParser()
        request = parser.parse(sample_get_request)

        assert request.method == "GET"
        assert request.target == "/user-agent"
        assert request.version == "HTTP/1.1"
        assert request.body == b""

    def test_parse_headers_in_order(self, sample_get_request: bytes):
        """Headers keep their order and their names as sent."""
        request = parse_request(sample_get_request)

        assert request.headers == (
            ("Host", "localhost:4221"),
            ("User-Agent", "pytest"),
            ("Accept", "*/*"),
        )

    def test_parse_post_with_body(self, sample_post_request: bytes):
        """Test parsing POST request with a body."""
        request = parse_request(sample_post_request)

        assert request.method == "POST"
        assert request.target == "/files/number"
        assert request.body == b"12345"
        assert request.get_header("Content-Length") == "5"

    def test_body_is_binary_safe(self):
        """Body bytes that are not valid UTF-8 pass through untouched."""
        body = b"\xff\xfe\x00\x01\r\n\r\nmore"
        request = parse_request(b"POST /files/blob HTTP/1.1\r\n\r\n" + body)

        assert request.body == body

    def test_split_only_on_first_blank_line(self):
        """A blank line inside the body belongs to the body."""
        request = parse_request(b"POST /files/a HTTP/1.1\r\nX: 1\r\n\r\nline1\r\n\r\nline2")

        assert request.headers == (("X", "1"),)
        assert request.body == b"line1\r\n\r\nline2"

    def test_target_not_decoded(self):
        """Percent-escapes and query strings stay in the target."""
        request = parse_request(b"GET /echo/a%20b?x=1 HTTP/1.1\r\n\r\n")

        assert request.target == "/echo/a%20b?x=1"

    def test_parse_case_sensitive_method(self):
        """Methods are not normalized."""
        request = parse_request(b"get / HTTP/1.1\r\n\r\n")

        assert request.method == "get"

    def test_header_value_keeps_colons(self):
        """Only the first ": " separates name from value."""
        request = parse_request(b"GET / HTTP/1.1\r\nHost: localhost: 4221\r\n\r\n")

        assert request.headers == (("Host", "localhost: 4221"),)

    def test_duplicate_headers_kept(self):
        """Repeated headers are not merged."""
        request = parse_request(
            b"GET / HTTP/1.1\r\nX-Tag: one\r\nX-Tag: two\r\n\r\n"
        )

        assert request.headers == (("X-Tag", "one"), ("X-Tag", "two"))
        assert request.get_all_headers("X-Tag") == ["one", "two"]


class TestMalformedRequests:
    """The parser accepts any input and never raises."""

    def test_empty_input(self):
        """Test parsing empty input."""
        request = parse_request(b"")

        assert request.method == ""
        assert request.target == ""
        assert request.version == ""
        assert request.headers == ()
        assert request.body == b""

    def test_no_blank_line(self):
        """Without a blank line everything is head and the body is empty."""
        request = parse_request(b"GET /echo/x HTTP/1.1\r\nHost: a")

        assert request.method == "GET"
        assert request.target == "/echo/x"
        assert request.headers == (("Host", "a"),)
        assert request.body == b""

    def test_short_start_line(self):
        """Missing start-line tokens become empty strings."""
        request = parse_request(b"GET\r\n\r\n")

        assert request.method == "GET"
        assert request.target == ""
        assert request.version == ""

    def test_extra_start_line_tokens_ignored(self):
        """Test that tokens past the version are dropped."""
        request = parse_request(b"GET / HTTP/1.1 extra\r\n\r\n")

        assert (request.method, request.target, request.version) == ("GET", "/", "HTTP/1.1")

    def test_header_without_separator(self):
        """A header line without ": " is kept as a one-element tuple."""
        request = parse_request(b"GET / HTTP/1.1\r\ngarbage\r\nHost: a\r\n\r\n")

        assert request.headers == (("garbage",), ("Host", "a"))
        assert request.get_header("garbage") == ""

    def test_colon_without_space_is_not_a_separator(self):
        """Test that only ": " separates a header."""
        request = parse_request(b"GET / HTTP/1.1\r\nHost:a\r\n\r\n")

        assert request.headers == (("Host:a",),)

    def test_invalid_utf8_in_head(self):
        """Undecodable head bytes are replaced, not raised."""
        request = parse_request(b"GET /echo/\xff HTTP/1.1\r\n\r\n")

        assert request.method == "GET"
        assert request.target == "/echo/\ufffd"

    @pytest.mark.parametrize("data", [
        b"\r\n\r\n",
        b"   ",
        b"\x00\x01\x02",
        b"GET / HTTP/1.1\r\n\r\n\r\n\r\n",
        b": \r\n: \r\n\r\n",
    ])
    def test_never_raises(self, data: bytes):
        """Test that arbitrary bytes always parse."""
        request = parse_request(data)
        assert isinstance(request, HTTPRequest)


class TestHTTPRequest:
    """Tests for HTTPRequest helpers."""

    def test_get_header_exact_name(self):
        """Header lookup is case-sensitive."""
        request = HTTPRequest(
            method="GET",
            target="/user-agent",
            headers=(("User-Agent", "curl/8.4.0"),),
        )

        assert request.get_header("User-Agent") == "curl/8.4.0"
        assert request.get_header("user-agent") == ""
        assert request.get_header("user-agent", "none") == "none"

    def test_get_header_first_occurrence(self):
        """Test that lookup returns the first duplicate."""
        request = HTTPRequest(
            method="GET",
            target="/",
            headers=(("User-Agent", "first"), ("User-Agent", "second")),
        )

        assert request.get_header("User-Agent") == "first"

    def test_user_agent_property(self):
        """Test the user_agent shortcut."""
        request = HTTPRequest(method="GET", target="/", headers=(("User-Agent", "pytest"),))

        assert request.user_agent == "pytest"
        assert HTTPRequest(method="GET", target="/").user_agent == ""

    def test_request_is_immutable(self):
        """Test that parsed requests cannot be modified."""
        request = HTTPRequest(method="GET", target="/")

        with pytest.raises(AttributeError):
            request.method = "POST"
