from pydantic import BaseModel


class FileMetadata(BaseModel):
    """Response schema for POST /api/fileanalyse."""
    name: str
    type: str
    size: int


class ErrorResponse(BaseModel):
    """Error envelope returned with every 4xx / 5xx."""
    error: str
