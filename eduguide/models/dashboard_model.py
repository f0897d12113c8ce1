# /eduguide/models/dashboard_model.py

# --- Core Imports ---
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class AttentionItem(BaseModel):
    """A student flagged on the dashboard, with the reasons it was flagged."""
    id: str
    name: str
    reasons: List[str]


class DashboardSummary(BaseModel):
    """
    Defines the data contract for the teacher dashboard summary endpoint.
    """

    totalStudents: int = Field(
        ...,
        description="The number of students owned by the teacher.",
        examples=[24]
    )

    averageLiteracy: Optional[float] = Field(
        default=None,
        description="Mean of every literacy score across the roster, rounded to one decimal. Null when no score exists.",
        examples=[78.4]
    )

    reflectionsCount: int = Field(
        ...,
        description="Total number of reflections recorded across the roster.",
        examples=[57]
    )

    classDistribution: Dict[str, int] = Field(default_factory=dict)

    studentsNeedingAttention: List[AttentionItem] = Field(default_factory=list)
