# /eduguide/services/database_helpers/upload_repository_sql.py

from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eduguide.db.models.upload_models import Upload


class UploadRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def add_upload(self, record: Dict) -> Upload:
        new_upload = Upload(**record)
        self.db.add(new_upload)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(new_upload)
        return new_upload

    def get_upload_by_id(self, upload_id: str) -> Optional[Upload]:
        return self.db.query(Upload).filter(Upload.id == upload_id).first()

    def get_all_uploads(self) -> List[Upload]:
        """All audit records, newest first."""
        return self.db.query(Upload).order_by(Upload.created_at.desc()).all()

    def finalize_upload(self, upload_id: str, data: Dict) -> Optional[Upload]:
        """Writes the final counts and status of an import."""
        upload = self.get_upload_by_id(upload_id)
        if upload is None:
            return None
        for key, value in data.items():
            setattr(upload, key, value)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(upload)
        return upload
