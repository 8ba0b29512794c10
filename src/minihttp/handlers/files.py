"""
=============================================================================
FILE HANDLER
=============================================================================

Serves and stores files in one configured directory.

    GET  /files/<name>   → 200 with the file bytes, or 404
    POST /files/<name>   → 201 after storing the request body, or 500

=============================================================================
FLOW
=============================================================================

    Request: GET /files/report.pdf

    1. Strip "/files/"                     → "report.pdf"
    2. reader(directory, "report.pdf")     → bytes or None
    3. None   → 404 Not Found
       bytes  → 200, application/octet-stream, Content-Length

    Request: POST /files/notes.txt  (body: b"hello")

    1. Strip "/files/"                     → "notes.txt"
    2. writer(directory, "notes.txt", b"hello") → True / False
    3. False  → 500 Internal Server Error
       True   → 201 Created

The file name is used as is: it is not percent-decoded, and joining it onto
the directory is entirely the reader/writer's business.
=============================================================================
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from ..http.request import HTTPRequest
from ..http.response import (
    HTTPResponse, ResponseBuilder,
    created, not_found, internal_error,
)
from .. import storage


logger = logging.getLogger(__name__)

FILES_PREFIX = "/files/"

# (directory, filename) → contents or None
FileReader = Callable[[Union[str, Path], str], Optional[bytes]]
# (directory, filename, data) → success
FileWriter = Callable[[Union[str, Path], str, bytes], bool]


class FileHandler:
    """
    Handler pair for the /files/ routes.

    The storage directory is fixed at construction time. The file-system
    primitives are injectable so tests (or other backends) can stand in for
    the disk:

        handler = FileHandler("/srv/files")
        router.get("/files/", prefix=True)(handler.read)
        router.post("/files/", prefix=True)(handler.write)

        # In-memory, for tests
        handler = FileHandler("mem", reader=store.get_file, writer=store.put_file)
    """

    def __init__(
        self,
        directory: Optional[Union[str, Path]],
        reader: FileReader = storage.read_file_or_none,
        writer: FileWriter = storage.write_file,
    ):
        """
        Initialize the file handler.

        Args:
            directory: Storage directory. None disables storage: every read
                       is a 404 and every write is a 500.
            reader: Read primitive, defaults to storage.read_file_or_none.
            writer: Write primitive, defaults to storage.write_file.
        """
        self.directory = directory
        self._reader = reader
        self._writer = writer

    def read(self, request: HTTPRequest) -> HTTPResponse:
        """Answer GET /files/<name> with the file contents."""
        filename = request.target[len(FILES_PREFIX):]

        if self.directory is None:
            logger.warning(f"No storage directory configured, cannot read {filename!r}")
            return not_found()

        data = self._reader(self.directory, filename)
        if data is None:
            return not_found()

        return ResponseBuilder().octet_stream(data).build()

    def write(self, request: HTTPRequest) -> HTTPResponse:
        """Answer POST /files/<name> by storing the request body."""
        filename = request.target[len(FILES_PREFIX):]

        if self.directory is None:
            logger.warning(f"No storage directory configured, cannot write {filename!r}")
            return internal_error()

        if not self._writer(self.directory, filename, request.body):
            return internal_error()

        return created()
