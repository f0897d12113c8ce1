# /eduguide/models/suggestion_model.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .student_model import SelScores, LITERACY_MIN, LITERACY_MAX


class DatedLiteracyScore(BaseModel):
    score: float = Field(..., ge=LITERACY_MIN, le=LITERACY_MAX)
    date: datetime


class DatedReflection(BaseModel):
    note: str = Field(..., min_length=1)
    date: datetime


class SuggestionRequest(BaseModel):
    """
    A snapshot of one student's data, used to build the teaching-suggestion
    prompt. Reflections are optional; only the three most recent are used.
    """
    name: str = Field(..., min_length=1)
    literacyScores: List[DatedLiteracyScore] = Field(default_factory=list)
    selScores: SelScores = Field(default_factory=SelScores)
    reflections: List[DatedReflection] = Field(default_factory=list)


class SuggestionResponse(BaseModel):
    suggestion: str


class GatewayStatus(BaseModel):
    available: bool
    message: str
    model: Optional[str] = None
