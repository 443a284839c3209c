"""Router – file metadata analysis."""

import logging

from fastapi import APIRouter, Request

from src.filemeta.config import Settings
from src.filemeta.errors import ClientInputError, InternalUploadError
from src.filemeta.schemas.upload import ErrorResponse, FileMetadata
from src.filemeta.services.upload_service import extract_metadata, receive_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Upload"])


@router.post(
    "/fileanalyse",
    response_model=FileMetadata,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "multipart/form-data": {
                    "schema": {
                        "type": "object",
                        "properties": {"upfile": {"type": "string", "format": "binary"}},
                        "required": ["upfile"],
                    },
                },
            },
        },
    },
)
async def analyse_file(request: Request) -> FileMetadata:
    """
    Report the name, declared MIME type and received size of one uploaded file.

    The file must be the only file part of a ``multipart/form-data`` body and
    be bound to the configured field (``upfile`` by default).  The content is
    discarded once measured.
    """
    settings: Settings = request.app.state.settings

    try:
        async with receive_upload(
            request,
            field_name=settings.upload_field,
            max_files=settings.max_files,
            max_fields=settings.max_fields,
            max_field_size=settings.max_field_size,
        ) as upload:
            metadata = await extract_metadata(upload, settings.max_upload_size)
    except ClientInputError as exc:
        logger.info("Upload rejected: %s", exc.message)
        raise
    except Exception as exc:
        logger.exception("Error processing file")
        raise InternalUploadError() from exc

    logger.info("📄 Analysed %s (%s, %d bytes)", metadata.name, metadata.type, metadata.size)
    return metadata
