# /eduguide/services/dashboard_service.py

# --- Core Imports ---
import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Optional

from ..models.dashboard_model import AttentionItem, DashboardSummary
from . import score_analytics
from .database_service import DatabaseService
from .student_service import serialize_student

logger = logging.getLogger(__name__)


# --- Core Public Function ---

def get_summary_data(teacher_id: str, db: DatabaseService, now: Optional[datetime] = None) -> DashboardSummary:
    """
    Calculates the dashboard statistics for one teacher's roster.

    Args:
        teacher_id: The authenticated teacher.
        db: An instance of the DatabaseService, provided by dependency injection.
        now: Reference time for the reflection-recency check. Defaults to now.

    Returns:
        A DashboardSummary with roster counts, the roster-wide literacy average,
        the class distribution and the students needing attention.
    """
    now = now or datetime.now(timezone.utc)
    try:
        students = [serialize_student(s) for s in db.get_students_by_teacher_id(teacher_id)]

        all_scores = [entry for s in students for entry in s["literacyScores"]]
        average = score_analytics.literacy_average_or_none(all_scores)

        attention = []
        for s in students:
            reasons = score_analytics.attention_reasons(s, now=now)
            if reasons:
                attention.append(AttentionItem(id=s["id"], name=s["name"], reasons=reasons))

        return DashboardSummary(
            totalStudents=len(students),
            averageLiteracy=round(average, 1) if average is not None else None,
            reflectionsCount=sum(len(s["reflections"]) for s in students),
            classDistribution=dict(Counter(s["class"] or "Unassigned" for s in students)),
            studentsNeedingAttention=attention,
        )
    except Exception as e:
        logger.exception("Error calculating dashboard summary for teacher %s: %s", teacher_id, e)
        # Re-raise so the router reports it as a 500.
        raise
