# /eduguide/services/import_helpers/csv_import.py

"""
The CSV roster import pipeline.

One call imports one file for one administrator:

    Received -> Streaming (row by row) -> Finalizing -> Completed
                                                      | CompletedWithErrors
                                                      | Failed

Rows are read in file order, one at a time. Each row is independent: a bad row
adds an entry to the error list and the loop moves on. Only a fault in the
stream itself (unreadable or empty file, undecodable bytes) stops the
import, and even then the audit record is finalized and the temporary file is
removed, because finalization runs in a `finally` block.
"""

import contextlib
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Tuple

import pandas as pd

from ..database_service import DatabaseService
from ..user_service import normalize_email
from ...models.upload_model import ImportResult, UploadStatus
from .row_parsing import RowRejected, build_student_record, clean_value, missing_required_fields

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 500

# Faults of the stream itself, as opposed to problems with a single row.
STREAM_ERRORS = (
    pd.errors.ParserError,
    pd.errors.EmptyDataError,
    UnicodeDecodeError,
    OSError,
)


class CsvImportError(ValueError):
    """The file could not be read to the end. The audit record is marked failed."""

    def __init__(self, message: str, upload_id: Optional[str] = None, processed: int = 0, created: int = 0):
        super().__init__(message)
        self.upload_id = upload_id
        self.processed = processed
        self.created = created


def stream_rows(file_path: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[Tuple[int, Dict[str, Any]]]:
    """
    Yields `(row_number, row)` pairs in file order. Row numbers count data rows
    from 1. Every cell is read as text so that the per-row parsing decides how
    to interpret it.

    Ragged lines are not stream faults. Fields beyond the header width are
    dropped like any other unrecognized column and missing trailing cells are
    empty. `index_col=False` keeps a ragged first row from being taken as an
    index column, so the rows yielded never depend on `chunk_size`.
    """
    row_number = 0
    with pd.read_csv(
        file_path,
        dtype=str,
        keep_default_na=False,
        chunksize=chunk_size,
        encoding="utf-8-sig",
        engine="python",
        index_col=False,
    ) as reader:
        for chunk in reader:
            chunk.columns = [str(column).strip() for column in chunk.columns]
            for row in chunk.to_dict(orient="records"):
                row_number += 1
                yield row_number, row


def import_row(row: Dict[str, Any], row_number: int, db: DatabaseService) -> Optional[str]:
    """
    Validates, resolves and persists one row. Returns None when a student was
    created, otherwise the error message for the summary.
    """
    missing = missing_required_fields(row)
    if missing:
        return f"Row {row_number}: missing required field(s): {', '.join(missing)}"

    name = clean_value(row.get("name"))
    raw_email = clean_value(row.get("teacherEmail"))

    teacher = db.get_teacher_by_email(normalize_email(raw_email))
    if teacher is None:
        return f"No teacher found with email: {raw_email}"

    try:
        record = build_student_record(row, name=name, teacher_id=teacher.id)
    except RowRejected as e:
        return f"Row {row_number}: {e}"

    try:
        db.add_student(record)
    except Exception as e:
        logger.warning("Persisting row %s (%s) failed: %s", row_number, name, e)
        return f"Failed to create student {name}: {e}"
    return None


def _final_status(errors: List[str], stream_failed: bool) -> UploadStatus:
    if stream_failed:
        return UploadStatus.FAILED
    if errors:
        return UploadStatus.COMPLETED_WITH_ERRORS
    return UploadStatus.COMPLETED


def remove_temp_file(file_path: str):
    with contextlib.suppress(FileNotFoundError):
        os.remove(file_path)


def import_students_from_csv(
    file_path: str,
    file_name: str,
    admin_id: str,
    db: DatabaseService,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> ImportResult:
    """
    Imports every row of the CSV at `file_path` and records one Upload audit
    entry for the attempt.

    Args:
        file_path: Temporary on-disk copy of the upload. Deleted before returning.
        file_name: The original file name, kept in the audit record.
        admin_id: The administrator who triggered the import.
        db: The DatabaseService for lookups and persistence.
        chunk_size: Number of rows pandas tokenizes per read.

    Returns:
        The batch summary: students created, rows processed and row errors.

    Raises:
        CsvImportError: the stream failed before the end of the file.
    """
    processed = 0
    created = 0
    errors: List[str] = []
    stream_failed = True

    try:
        upload = db.add_upload({
            "id": f"upl_{uuid.uuid4().hex[:12]}",
            "file_name": file_name,
            "uploaded_by": admin_id,
            "status": UploadStatus.PROCESSING.value,
            "created_at": datetime.now(timezone.utc),
        })
        logger.info("Import %s started: file=%s admin=%s", upload.id, file_name, admin_id)

        try:
            for row_number, row in stream_rows(file_path, chunk_size=chunk_size):
                processed += 1
                error = import_row(row, row_number, db)
                if error is None:
                    created += 1
                else:
                    logger.warning("Import %s rejected row %s: %s", upload.id, row_number, error)
                    errors.append(error)
            stream_failed = False
        except STREAM_ERRORS as e:
            logger.error("Import %s aborted after %s row(s): %s", upload.id, processed, e)
            raise CsvImportError(
                f"The CSV file could not be read: {e}",
                upload_id=upload.id,
                processed=processed,
                created=created,
            ) from e
        finally:
            status = _final_status(errors, stream_failed)
            # Start from a clean transaction whatever happened in the loop.
            db.rollback()
            db.finalize_upload(upload.id, {
                "records_processed": processed,
                "students_added": created,
                "has_errors": bool(errors) or stream_failed,
                "status": status.value,
                "finalized_at": datetime.now(timezone.utc),
            })
    finally:
        remove_temp_file(file_path)

    logger.info(
        "Import %s finished: processed=%s created=%s errors=%s",
        upload.id, processed, created, len(errors),
    )
    return ImportResult(count=created, processed=processed, errors=errors or None)
