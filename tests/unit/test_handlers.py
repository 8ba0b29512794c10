"""
Unit tests for route handlers.
"""

from pathlib import Path
from typing import Dict

from minihttp.handlers import root, echo, user_agent, FileHandler
from minihttp.http.request import HTTPRequest
from minihttp.http.status_codes import HTTPStatus


class MemoryStore:
    """In-memory stand-in for the file-system primitives."""

    def __init__(self, fail_writes: bool = False):
        self.files: Dict[str, bytes] = {}
        self.fail_writes = fail_writes

    def read(self, directory, filename):
        return self.files.get(filename)

    def write(self, directory, filename, data):
        if self.fail_writes:
            return False
        self.files[filename] = data
        return True


class TestTextHandlers:
    """Tests for root, echo and user_agent."""

    def test_root(self):
        """Test the root handler returns a bare 200."""
        response = root(HTTPRequest(method="GET", target="/"))

        assert response.to_bytes() == b"HTTP/1.1 200 OK\r\n\r\n"

    def test_echo(self):
        """Test echo sets Content-Type before Content-Length."""
        response = echo(HTTPRequest(method="GET", target="/echo/abc"))

        assert response.body == b"abc"
        assert response.headers == [("Content-Type", "text/plain"), ("Content-Length", "3")]

    def test_echo_percent_decodes(self):
        """Test echo decodes %20 to a space."""
        response = echo(HTTPRequest(method="GET", target="/echo/hello%20world"))

        assert response.body == b"hello world"
        assert response.get_header("Content-Length") == "11"

    def test_echo_multibyte(self):
        """Test Content-Length counts UTF-8 bytes."""
        response = echo(HTTPRequest(method="GET", target="/echo/%C3%A9"))

        assert response.body == "é".encode("utf-8")
        assert response.get_header("Content-Length") == "2"

    def test_echo_empty(self):
        """Test echo with nothing after the prefix."""
        response = echo(HTTPRequest(method="GET", target="/echo/"))

        assert response.body == b""
        assert response.get_header("Content-Length") == "0"

    def test_echo_keeps_slashes(self):
        """Test that slashes after the prefix are echoed."""
        response = echo(HTTPRequest(method="GET", target="/echo/a/b"))

        assert response.body == b"a/b"

    def test_user_agent(self):
        """Test the exact user-agent response bytes."""
        request = HTTPRequest(
            method="GET",
            target="/user-agent",
            headers=(("Host", "localhost:4221"), ("User-Agent", "foobar/1.2.3")),
        )

        response = user_agent(request)

        assert response.to_bytes() == (
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: text/plain\r\n"
            b"Content-Length: 12\r\n"
            b"\r\n"
            b"foobar/1.2.3"
        )

    def test_user_agent_missing(self):
        """Test that a missing header gives 200 with an empty body."""
        response = user_agent(HTTPRequest(method="GET", target="/user-agent"))

        assert response.status == HTTPStatus.OK
        assert response.body == b""
        assert response.get_header("Content-Length") == "0"

    def test_user_agent_case_sensitive(self):
        """Test that a lowercase header name is not found."""
        request = HTTPRequest(
            method="GET",
            target="/user-agent",
            headers=(("user-agent", "lower"),),
        )

        assert user_agent(request).body == b""


class TestFileHandler:
    """Tests for FileHandler with injected primitives."""

    def test_read_existing(self):
        """Test reading a stored file."""
        store = MemoryStore()
        store.files["report.pdf"] = b"%PDF"
        handler = FileHandler("mem", reader=store.read, writer=store.write)

        response = handler.read(HTTPRequest(method="GET", target="/files/report.pdf"))

        assert response.to_bytes() == (
            b"HTTP/1.1 200 OK\r\n"
            b"Content-Type: application/octet-stream\r\n"
            b"Content-Length: 4\r\n"
            b"\r\n"
            b"%PDF"
        )

    def test_read_missing(self):
        """Test that a missing file is a bare 404."""
        store = MemoryStore()
        handler = FileHandler("mem", reader=store.read, writer=store.write)

        response = handler.read(HTTPRequest(method="GET", target="/files/missing"))

        assert response.to_bytes() == b"HTTP/1.1 404 Not Found\r\n\r\n"

    def test_write(self):
        """Test that a write stores the body and answers 201."""
        store = MemoryStore()
        handler = FileHandler("mem", reader=store.read, writer=store.write)

        response = handler.write(HTTPRequest(method="POST", target="/files/notes.txt", body=b"hello"))

        assert response.to_bytes() == b"HTTP/1.1 201 Created\r\n\r\n"
        assert store.files == {"notes.txt": b"hello"}

    def test_write_failure(self):
        """Test that a failed write answers 500."""
        store = MemoryStore(fail_writes=True)
        handler = FileHandler("mem", reader=store.read, writer=store.write)

        response = handler.write(HTTPRequest(method="POST", target="/files/notes.txt", body=b"x"))

        assert response.to_bytes() == b"HTTP/1.1 500 Internal Server Error\r\n\r\n"

    def test_filename_not_decoded(self):
        """Test that the file name is used as sent."""
        store = MemoryStore()
        handler = FileHandler("mem", reader=store.read, writer=store.write)

        handler.write(HTTPRequest(method="POST", target="/files/a%20b", body=b"x"))

        assert list(store.files) == ["a%20b"]

    def test_no_directory(self):
        """Without a storage directory reads are 404 and writes are 500."""
        store = MemoryStore()
        handler = FileHandler(None, reader=store.read, writer=store.write)

        read = handler.read(HTTPRequest(method="GET", target="/files/x"))
        write = handler.write(HTTPRequest(method="POST", target="/files/x", body=b"x"))

        assert read.status == HTTPStatus.NOT_FOUND
        assert write.status == HTTPStatus.INTERNAL_SERVER_ERROR
        assert store.files == {}

    def test_disk_round_trip(self, storage_dir: Path):
        """Default primitives write to and read from the directory."""
        handler = FileHandler(storage_dir)
        body = bytes(range(256))

        handler.write(HTTPRequest(method="POST", target="/files/blob", body=body))
        response = handler.read(HTTPRequest(method="GET", target="/files/blob"))

        assert (storage_dir / "blob").read_bytes() == body
        assert response.body == body
        assert response.get_header("Content-Length") == "256"
