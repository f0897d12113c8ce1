# /eduguide/services/database_service.py

from typing import Dict, Generator, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from eduguide.db.database import get_db

# --- Repository Imports ---
from .database_helpers.user_repository_sql import UserRepositorySQL
from .database_helpers.student_repository_sql import StudentRepositorySQL
from .database_helpers.upload_repository_sql import UploadRepositorySQL


class DatabaseService:
    def __init__(self, db_session: Session):
        """
        Facade over the SQL repositories. Services talk to this class only, so
        they never build queries themselves.
        """
        if db_session is None:
            raise ValueError("A database session is required.")
        self.session = db_session
        self.user_repo = UserRepositorySQL(db_session)
        self.student_repo = StudentRepositorySQL(db_session)
        self.upload_repo = UploadRepositorySQL(db_session)

    def rollback(self):
        """Discards any pending work so the session can be used again."""
        self.session.rollback()

    # --- USER METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str): return self.user_repo.get_user_by_id(user_id)
    def get_user_by_email(self, email: str): return self.user_repo.get_user_by_email(email)
    def get_teacher_by_email(self, email: str): return self.user_repo.get_user_by_email_and_role(email, "teacher")
    def add_user(self, user_record: Dict): return self.user_repo.add_user(user_record)

    # --- STUDENT METHODS (DELEGATED) ---
    def add_student(self, student_record: Dict, literacy_scores: Optional[List[Dict]] = None):
        return self.student_repo.add_student(student_record, literacy_scores=literacy_scores)
    def get_students_by_teacher_id(self, teacher_id: str) -> List: return self.student_repo.get_students_by_teacher_id(teacher_id)
    def get_student_for_teacher(self, student_id: str, teacher_id: str): return self.student_repo.get_student_for_teacher(student_id, teacher_id)
    def count_students(self) -> int: return self.student_repo.count_students()
    def update_sel_scores(self, student, sel_data: Dict): return self.student_repo.update_sel_scores(student, sel_data)
    def add_literacy_score(self, student, score_record: Dict): return self.student_repo.add_literacy_score(student, score_record)
    def add_reflection(self, student, reflection_record: Dict): return self.student_repo.add_reflection(student, reflection_record)

    # --- UPLOAD AUDIT METHODS (DELEGATED) ---
    def add_upload(self, upload_record: Dict): return self.upload_repo.add_upload(upload_record)
    def get_upload_by_id(self, upload_id: str): return self.upload_repo.get_upload_by_id(upload_id)
    def get_all_uploads(self) -> List: return self.upload_repo.get_all_uploads()
    def finalize_upload(self, upload_id: str, final_data: Dict): return self.upload_repo.finalize_upload(upload_id, final_data)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """
    FastAPI dependency that provides a DatabaseService bound to the request's
    session.
    """
    yield DatabaseService(db_session=db)
