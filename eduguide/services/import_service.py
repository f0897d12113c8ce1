# /eduguide/services/import_service.py

"""
Business logic behind the admin roster-import endpoints.

It stages the uploaded file on disk, hands it to the streaming CSV pipeline in
`import_helpers.csv_import`, and exposes the upload audit history.
"""

import logging
import os
import shutil
import uuid
from typing import List

from fastapi import UploadFile

from .database_service import DatabaseService
from .import_helpers import csv_import
from ..core.config import Settings
from ..models.upload_model import ImportResult, UploadRecord

logger = logging.getLogger(__name__)


def _save_uploaded_file(file: UploadFile, upload_dir: str) -> str:
    """
    Copies the uploaded file into `upload_dir` under a collision-free name and
    returns the path. The pipeline deletes this file once it is consumed; a
    copy that fails part-way is deleted here.
    """
    os.makedirs(upload_dir, exist_ok=True)
    safe_filename = f"roster_{uuid.uuid4().hex[:8]}_{os.path.basename(file.filename or 'upload.csv')}"
    path = os.path.join(upload_dir, safe_filename)
    try:
        with open(path, "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)
    except Exception:
        csv_import.remove_temp_file(path)
        raise
    return path


def import_roster(file: UploadFile, admin_id: str, db: DatabaseService, settings: Settings) -> ImportResult:
    """
    Runs one CSV import for the given administrator.

    Raises:
        ValueError: the upload is not a CSV file.
        csv_import.CsvImportError: the file could not be read to the end.
    """
    file_name = os.path.basename(file.filename or "upload.csv")
    if not file_name.lower().endswith(".csv"):
        raise ValueError("Only .csv files can be imported.")

    temp_path = _save_uploaded_file(file, settings.upload_dir)
    logger.info("Staged upload %s for admin %s at %s", file_name, admin_id, temp_path)
    return csv_import.import_students_from_csv(
        file_path=temp_path,
        file_name=file_name,
        admin_id=admin_id,
        db=db,
        chunk_size=settings.csv_chunk_size,
    )


def list_uploads(db: DatabaseService) -> List[UploadRecord]:
    """The upload audit history, newest first."""
    return [
        UploadRecord(
            id=upload.id,
            uploadedAt=upload.created_at,
            fileName=upload.file_name,
            recordsProcessed=upload.records_processed or 0,
            studentsAdded=upload.students_added or 0,
            hasErrors=bool(upload.has_errors),
            status=upload.status,
        )
        for upload in db.get_all_uploads()
    ]
