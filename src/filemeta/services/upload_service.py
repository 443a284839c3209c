"""Service layer – multipart ingestion and metadata extraction.

The request body is parsed in full before any handler logic runs.  File
parts land in Starlette's spooled temporary files (memory up to 1 MB, then
an anonymous file on disk); ``receive_upload`` closes every staged part on
the way out, whatever happened in between.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Request
from starlette.datastructures import FormData, UploadFile
from starlette.formparsers import MultiPartException, MultiPartParser

from src.filemeta.config import DEFAULT_CONTENT_TYPE, READ_CHUNK_SIZE
from src.filemeta.errors import (
    ClientInputError,
    FileTooLargeError,
    MalformedUploadError,
    NoFileUploadedError,
)
from src.filemeta.schemas.upload import FileMetadata

logger = logging.getLogger(__name__)


class UploadFormParser(MultiPartParser):
    """
    Starlette's multipart parser, strict about how the body ends.

    A body cut off inside a part never reaches ``on_part_end``, so the part
    would silently vanish from the form; here it is a parse error instead.
    Every error leaving ``parse`` closes the parts staged so far.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._open_parts = 0

    def on_part_begin(self) -> None:
        super().on_part_begin()
        self._open_parts += 1

    def on_part_end(self) -> None:
        super().on_part_end()
        self._open_parts -= 1

    def _discard_staged(self) -> None:
        for file in self._files_to_close_on_error:
            file.close()

    async def parse(self) -> FormData:
        try:
            form = await super().parse()
        except ValueError as exc:
            # python-multipart parse errors (broken framing, bad headers)
            self._discard_staged()
            raise MultiPartException("Malformed multipart body.") from exc
        if self._open_parts:
            self._discard_staged()
            raise MultiPartException("Multipart body ended before its closing boundary.")
        return form


def is_multipart(request: Request) -> bool:
    media_type = request.headers.get("content-type", "").split(";", 1)[0]
    return media_type.strip().lower() == "multipart/form-data"


async def parse_form(
    request: Request,
    *,
    max_files: int,
    max_fields: int,
    max_field_size: int,
) -> FormData:
    """Parse the whole body, allowing at most *max_files* file parts."""
    if not is_multipart(request):
        return await request.form(max_files=max_files, max_fields=max_fields)

    parser = UploadFormParser(
        request.headers,
        request.stream(),
        max_files=max_files,
        max_fields=max_fields,
        max_part_size=max_field_size,
    )
    try:
        return await parser.parse()
    except ClientInputError:
        raise
    except MultiPartException as exc:
        raise MalformedUploadError(exc.message) from exc


async def release_form(form: FormData) -> None:
    """Close every staged part; failures are logged, never raised."""
    try:
        await form.close()
    except OSError as exc:
        logger.warning("Error deleting temp upload data: %s", exc)


@asynccontextmanager
async def receive_upload(
    request: Request,
    *,
    field_name: str,
    max_files: int = 1,
    max_fields: int = 8,
    max_field_size: int = 128 * 1024,
) -> AsyncIterator[UploadFile]:
    """
    Yield the file part bound to *field_name*.

    Raises ``NoFileUploadedError`` when the field is missing, holds a plain
    text value, or carries an empty filename (a form submitted with nothing
    selected).
    """
    form = await parse_form(
        request,
        max_files=max_files,
        max_fields=max_fields,
        max_field_size=max_field_size,
    )
    try:
        upload = form.get(field_name)
        if not isinstance(upload, UploadFile) or not upload.filename:
            raise NoFileUploadedError()
        yield upload
    finally:
        await release_form(form)


async def measure_size(upload: UploadFile, max_size: int) -> int:
    """Count the bytes actually received for *upload*, up to *max_size* inclusive."""
    await upload.seek(0)
    size = 0
    while chunk := await upload.read(READ_CHUNK_SIZE):
        size += len(chunk)
        if size > max_size:
            raise FileTooLargeError(max_size)
    return size


async def extract_metadata(upload: UploadFile, max_size: int) -> FileMetadata:
    """Build the ``{name, type, size}`` record for a staged upload."""
    size = await measure_size(upload, max_size)
    return FileMetadata(
        name=upload.filename or "",
        type=upload.content_type or DEFAULT_CONTENT_TYPE,
        size=size,
    )
