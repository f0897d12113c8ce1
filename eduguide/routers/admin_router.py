# /eduguide/routers/admin_router.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File

from ..core.config import Settings, get_settings
from ..core.deps import require_admin
from ..db.models.user_model import User as UserModel
from ..models.upload_model import ImportResult, UploadRecord
from ..services import import_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.import_helpers.csv_import import CsvImportError

logger = logging.getLogger(__name__)

router = APIRouter()


# A plain `def` endpoint runs in a worker thread, so an import keeps running to
# its finalization step even if the client disconnects.
@router.post(
    "/upload",
    response_model=ImportResult,
    response_model_exclude_none=True,
    summary="Bulk-import Students from a CSV File"
)
def upload_roster_csv(
    file: UploadFile = File(...),
    current_admin: UserModel = Depends(require_admin),
    db: DatabaseService = Depends(get_db_service),
    settings: Settings = Depends(get_settings),
):
    try:
        return import_service.import_roster(file=file, admin_id=current_admin.id, db=db, settings=settings)
    except CsvImportError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(e), "uploadId": e.upload_id, "processed": e.processed, "count": e.created},
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except Exception as e:
        logger.exception("Unexpected error during CSV import: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="An unexpected server error occurred during the import.")


@router.get("/uploads", response_model=List[UploadRecord], summary="List the Upload Audit History")
def get_upload_history(
    current_admin: UserModel = Depends(require_admin),
    db: DatabaseService = Depends(get_db_service),
):
    return import_service.list_uploads(db)
