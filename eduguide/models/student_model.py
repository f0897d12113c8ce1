# /eduguide/models/student_model.py

# --- Core Imports ---
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

# --- Shared value ranges ---
AGE_MIN, AGE_MAX = 5, 18
SEL_MIN, SEL_MAX = 1, 5
LITERACY_MIN, LITERACY_MAX = 0, 100


# --- Embedded entries ---

class LiteracyScoreEntry(BaseModel):
    """A single literacy assessment result."""
    model_config = ConfigDict(from_attributes=True)

    score: float = Field(..., ge=LITERACY_MIN, le=LITERACY_MAX)
    date: Optional[datetime] = Field(
        default=None,
        description="When the assessment was taken. Defaults to the time it is recorded."
    )


class ReflectionEntry(BaseModel):
    """A free-text observation a teacher recorded about a student."""
    model_config = ConfigDict(from_attributes=True)

    note: str = Field(..., min_length=1)
    date: Optional[datetime] = Field(default=None)


class SelScores(BaseModel):
    """The fixed social-emotional-learning triple. Unset means not assessed."""
    empathy: Optional[int] = Field(default=None, ge=SEL_MIN, le=SEL_MAX)
    regulation: Optional[int] = Field(default=None, ge=SEL_MIN, le=SEL_MAX)
    cooperation: Optional[int] = Field(default=None, ge=SEL_MIN, le=SEL_MAX)

    def is_empty(self) -> bool:
        return self.empathy is None and self.regulation is None and self.cooperation is None


# --- Request bodies ---

class StudentCreate(BaseModel):
    """The model used when a teacher creates a student directly."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="The full name of the student.")
    age: Optional[int] = Field(default=None, ge=AGE_MIN, le=AGE_MAX)
    class_name: Optional[str] = Field(default=None, alias="class")
    literacyScores: List[LiteracyScoreEntry] = Field(default_factory=list)
    selScores: Optional[SelScores] = Field(default=None)


class ReflectionCreate(BaseModel):
    note: str = Field(..., min_length=1)
    date: Optional[datetime] = Field(default=None)


class LiteracyScoreCreate(LiteracyScoreEntry):
    pass


class SelScoresUpdate(SelScores):
    """Partial update: only the competencies present in the payload change."""
    pass


# --- Responses ---

class Student(BaseModel):
    """
    The full representation of a Student resource, as it is returned by the API.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="The unique, server-generated identifier for the student.")
    name: str
    age: Optional[int] = None
    class_name: Optional[str] = Field(default=None, alias="class")
    teacherId: str
    literacyScores: List[LiteracyScoreEntry] = Field(default_factory=list)
    selScores: SelScores = Field(default_factory=SelScores)
    reflections: List[ReflectionEntry] = Field(default_factory=list)
    createdAt: Optional[datetime] = None


class StudentSummary(Student):
    """A roster row: the student plus the derived values a dashboard shows."""
    literacyAverage: Optional[float] = Field(
        default=None,
        description="Mean literacy score, or null when no score has been recorded."
    )
    needsAttention: bool = False


class ReflectionList(BaseModel):
    message: str
    reflections: List[ReflectionEntry]


class LiteracyScoreList(BaseModel):
    message: str
    literacyScores: List[LiteracyScoreEntry]


class SelScoresResponse(BaseModel):
    message: str
    selScores: SelScores
