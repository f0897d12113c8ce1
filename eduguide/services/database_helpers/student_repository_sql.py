# /eduguide/services/database_helpers/student_repository_sql.py

"""
This module contains all the raw SQLAlchemy queries for the Student table and
its LiteracyScore and Reflection children.

Every read or write that a teacher triggers is scoped by `teacher_id`, so a
teacher can never see or modify another teacher's students.
"""

from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from eduguide.db.models.student_models import Student, LiteracyScore, Reflection


class StudentRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError:
            # Leave the session usable for the next operation.
            self.db.rollback()
            raise

    def _with_children(self):
        return self.db.query(Student).options(
            selectinload(Student.literacy_scores),
            selectinload(Student.reflections),
        )

    # --- Student Methods ---

    def add_student(self, record: Dict, literacy_scores: Optional[List[Dict]] = None) -> Student:
        """
        Creates a new Student record, optionally with initial literacy scores.
        The record must carry a `teacher_id`; the NOT NULL constraint rejects
        it otherwise.
        """
        new_student = Student(**record)
        for position, score_record in enumerate(literacy_scores or []):
            new_student.literacy_scores.append(LiteracyScore(position=position, **score_record))
        self.db.add(new_student)
        self._commit()
        self.db.refresh(new_student)
        return new_student

    def get_students_by_teacher_id(self, teacher_id: str) -> List[Student]:
        return (
            self._with_children()
            .filter(Student.teacher_id == teacher_id)
            .order_by(Student.name)
            .all()
        )

    def get_student_for_teacher(self, student_id: str, teacher_id: str) -> Optional[Student]:
        """Fetches a student only if it is owned by the given teacher."""
        return (
            self._with_children()
            .filter(Student.id == student_id, Student.teacher_id == teacher_id)
            .first()
        )

    def count_students(self) -> int:
        return self.db.query(Student).count()

    def update_sel_scores(self, student: Student, data: Dict) -> Student:
        for key, value in data.items():
            setattr(student, key, value)
        self._commit()
        self.db.refresh(student)
        return student

    # --- Child collection Methods ---

    def add_literacy_score(self, student: Student, record: Dict) -> Student:
        record["position"] = len(student.literacy_scores)
        student.literacy_scores.append(LiteracyScore(**record))
        self._commit()
        self.db.refresh(student)
        return student

    def add_reflection(self, student: Student, record: Dict) -> Student:
        record["position"] = len(student.reflections)
        student.reflections.append(Reflection(**record))
        self._commit()
        self.db.refresh(student)
        return student
