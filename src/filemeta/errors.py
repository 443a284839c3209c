"""Upload error taxonomy.

Client-side causes map to HTTP 400, everything else to HTTP 500.  The
``message`` is what the caller sees in the ``{"error": ...}`` envelope, so
it must never carry paths or exception text from the server side.
"""

from __future__ import annotations

from starlette.formparsers import MultiPartException

MB = 1024 * 1024
KB = 1024


def format_size(num_bytes: int) -> str:
    """Render a byte limit the way it reads in error messages (``10MB``)."""
    if num_bytes >= MB and num_bytes % MB == 0:
        return f"{num_bytes // MB}MB"
    if num_bytes >= KB and num_bytes % KB == 0:
        return f"{num_bytes // KB}KB"
    return f"{num_bytes} bytes"


class UploadError(Exception):
    status_code = 500
    message = "Server error processing file"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ClientInputError(UploadError):
    status_code = 400
    message = "Invalid upload"


class NoFileUploadedError(ClientInputError):
    message = "No file uploaded"


class FileTooLargeError(ClientInputError):
    def __init__(self, max_size: int) -> None:
        self.max_size = max_size
        super().__init__(f"File size too large. Maximum size is {format_size(max_size)}")


class MalformedUploadError(ClientInputError):
    message = "Malformed multipart body"


class RequestBodyTooLargeError(MultiPartException, ClientInputError):
    """The whole body outgrew the file, text-field and framing budget.

    Also a ``MultiPartException`` so the multipart parser closes the parts it
    already staged before the error leaves it.
    """

    def __init__(self, max_size: int) -> None:
        self.max_size = max_size
        ClientInputError.__init__(self, f"Request body too large. Maximum size is {format_size(max_size)}")


class InternalUploadError(UploadError):
    pass
