# /eduguide/services/student_service.py

"""
This service module holds the business logic for the direct teacher actions on
students: listing the roster, creating a student, reading one student, and
appending reflections, literacy scores and SEL ratings.

Every function takes the authenticated teacher's id and only ever touches
students that teacher owns. A student that does not exist and a student owned
by someone else look the same to the caller: `None`.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .database_service import DatabaseService
from . import score_analytics
from ..models import student_model
from ..models.suggestion_model import SuggestionRequest

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


# --- Serialization helpers ---

def serialize_student(student) -> Dict:
    """Converts a SQLAlchemy Student (with its children) into the API shape."""
    return {
        "id": student.id,
        "name": student.name,
        "age": student.age,
        "class": student.class_name,
        "teacherId": student.teacher_id,
        "literacyScores": [
            {"score": entry.score, "date": score_analytics.as_utc(entry.date)}
            for entry in student.literacy_scores
        ],
        "selScores": {
            "empathy": student.empathy,
            "regulation": student.regulation,
            "cooperation": student.cooperation,
        },
        "reflections": [
            {"note": entry.note, "date": score_analytics.as_utc(entry.date)}
            for entry in student.reflections
        ],
        "createdAt": score_analytics.as_utc(student.created_at),
    }


def summarize_student(student, now: Optional[datetime] = None) -> student_model.StudentSummary:
    data = serialize_student(student)
    data["literacyAverage"] = score_analytics.literacy_average_or_none(data["literacyScores"])
    data["needsAttention"] = score_analytics.needs_attention(data, now=now)
    return student_model.StudentSummary.model_validate(data)


# --- Public Service Functions ---

def get_students_for_teacher(teacher_id: str, db: DatabaseService) -> List[student_model.StudentSummary]:
    now = _now()
    return [summarize_student(s, now=now) for s in db.get_students_by_teacher_id(teacher_id)]


def get_student(student_id: str, teacher_id: str, db: DatabaseService) -> Optional[student_model.Student]:
    student = db.get_student_for_teacher(student_id, teacher_id)
    if student is None:
        return None
    return student_model.Student.model_validate(serialize_student(student))


def create_student(student_data: student_model.StudentCreate, teacher_id: str, db: DatabaseService) -> student_model.Student:
    """Creates a student owned by the calling teacher."""
    sel = student_data.selScores or student_model.SelScores()
    record = {
        "id": f"stu_{uuid.uuid4().hex[:12]}",
        "name": student_data.name.strip(),
        "age": student_data.age,
        "class_name": student_data.class_name,
        "teacher_id": teacher_id,
        "empathy": sel.empathy,
        "regulation": sel.regulation,
        "cooperation": sel.cooperation,
    }
    now = _now()
    literacy_records = [
        {"id": f"lit_{uuid.uuid4().hex[:12]}", "score": entry.score, "date": entry.date or now}
        for entry in student_data.literacyScores
    ]
    new_student = db.add_student(record, literacy_scores=literacy_records)
    logger.info("Teacher %s created student %s", teacher_id, new_student.id)
    return student_model.Student.model_validate(serialize_student(new_student))


def add_reflection(
    student_id: str,
    reflection: student_model.ReflectionCreate,
    teacher_id: str,
    db: DatabaseService,
) -> Optional[List[student_model.ReflectionEntry]]:
    student = db.get_student_for_teacher(student_id, teacher_id)
    if student is None:
        return None
    db.add_reflection(student, {
        "id": f"ref_{uuid.uuid4().hex[:12]}",
        "note": reflection.note,
        "teacher_id": teacher_id,
        "date": reflection.date or _now(),
    })
    return student_model.Student.model_validate(serialize_student(student)).reflections


def add_literacy_score(
    student_id: str,
    score: student_model.LiteracyScoreCreate,
    teacher_id: str,
    db: DatabaseService,
) -> Optional[List[student_model.LiteracyScoreEntry]]:
    student = db.get_student_for_teacher(student_id, teacher_id)
    if student is None:
        return None
    db.add_literacy_score(student, {
        "id": f"lit_{uuid.uuid4().hex[:12]}",
        "score": score.score,
        "date": score.date or _now(),
    })
    return student_model.Student.model_validate(serialize_student(student)).literacyScores


def update_sel_scores(
    student_id: str,
    sel_update: student_model.SelScoresUpdate,
    teacher_id: str,
    db: DatabaseService,
) -> Optional[student_model.SelScores]:
    """
    Partially updates the SEL triple. Competencies missing from the payload
    keep their stored value; explicit values, including null, overwrite it.
    """
    update_data = sel_update.model_dump(exclude_unset=True)
    if not update_data:
        raise ValueError("No SEL scores provided.")

    student = db.get_student_for_teacher(student_id, teacher_id)
    if student is None:
        return None
    db.update_sel_scores(student, update_data)
    return student_model.SelScores(
        empathy=student.empathy,
        regulation=student.regulation,
        cooperation=student.cooperation,
    )


def build_suggestion_request(student_id: str, teacher_id: str, db: DatabaseService) -> Optional[SuggestionRequest]:
    """Builds the suggestion-gateway payload from a stored student."""
    student = db.get_student_for_teacher(student_id, teacher_id)
    if student is None:
        return None
    data = serialize_student(student)
    return SuggestionRequest.model_validate({
        "name": data["name"],
        "literacyScores": data["literacyScores"],
        "selScores": data["selScores"],
        "reflections": data["reflections"],
    })
