# /eduguide/models/upload_model.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict


class UploadStatus(str, Enum):
    """Lifecycle states of one CSV import."""
    PROCESSING = "processing"
    COMPLETED = "completed"
    COMPLETED_WITH_ERRORS = "completed_with_errors"
    FAILED = "failed"


class ImportResult(BaseModel):
    """
    The summary returned to the admin after a CSV import. `errors` holds one
    entry per rejected row, in file order, and is omitted from the response
    when the import had no row errors.
    """
    count: int = Field(..., description="Number of students actually created.")
    processed: int = Field(..., description="Number of data rows read from the file.")
    errors: Optional[List[str]] = Field(default=None)


class UploadRecord(BaseModel):
    """One entry of the upload audit history."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    uploadedAt: Optional[datetime] = Field(default=None)
    fileName: str
    recordsProcessed: int
    studentsAdded: int
    hasErrors: bool
    status: UploadStatus
