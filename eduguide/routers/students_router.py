# /eduguide/routers/students_router.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.deps import require_teacher
from ..db.models.user_model import User as UserModel
from ..models import student_model
from ..models.suggestion_model import SuggestionResponse
from ..services import student_service, suggestion_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.gemini_service import GeminiGateway, SuggestionGatewayError, get_gemini_gateway

router = APIRouter()


def _not_found(student_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Student with ID {student_id} not found")


# --- STUDENT COLLECTION ENDPOINTS (/api/students) ---

@router.get("", response_model=List[student_model.StudentSummary], summary="Get the Teacher's Students")
def get_students(
    current_teacher: UserModel = Depends(require_teacher),
    db: DatabaseService = Depends(get_db_service),
):
    return student_service.get_students_for_teacher(teacher_id=current_teacher.id, db=db)


@router.post("", response_model=student_model.Student, status_code=status.HTTP_201_CREATED, summary="Create a Student")
def create_student(
    student_create: student_model.StudentCreate,
    current_teacher: UserModel = Depends(require_teacher),
    db: DatabaseService = Depends(get_db_service),
):
    return student_service.create_student(student_data=student_create, teacher_id=current_teacher.id, db=db)


# --- INDIVIDUAL STUDENT ENDPOINTS (/api/students/{student_id}) ---

@router.get("/{student_id}", response_model=student_model.Student, summary="Get a Single Student")
def get_student(
    student_id: str,
    current_teacher: UserModel = Depends(require_teacher),
    db: DatabaseService = Depends(get_db_service),
):
    student = student_service.get_student(student_id=student_id, teacher_id=current_teacher.id, db=db)
    if student is None:
        raise _not_found(student_id)
    return student


@router.post("/{student_id}/reflection", response_model=student_model.ReflectionList, summary="Add a Reflection")
def add_reflection(
    student_id: str,
    reflection: student_model.ReflectionCreate,
    current_teacher: UserModel = Depends(require_teacher),
    db: DatabaseService = Depends(get_db_service),
):
    reflections = student_service.add_reflection(student_id, reflection, teacher_id=current_teacher.id, db=db)
    if reflections is None:
        raise _not_found(student_id)
    return {"message": "Reflection added", "reflections": reflections}


@router.post("/{student_id}/literacy-scores", response_model=student_model.LiteracyScoreList, summary="Add a Literacy Score")
def add_literacy_score(
    student_id: str,
    score: student_model.LiteracyScoreCreate,
    current_teacher: UserModel = Depends(require_teacher),
    db: DatabaseService = Depends(get_db_service),
):
    scores = student_service.add_literacy_score(student_id, score, teacher_id=current_teacher.id, db=db)
    if scores is None:
        raise _not_found(student_id)
    return {"message": "Literacy score added", "literacyScores": scores}


@router.put("/{student_id}/sel-scores", response_model=student_model.SelScoresResponse, summary="Update SEL Scores")
def update_sel_scores(
    student_id: str,
    sel_update: student_model.SelScoresUpdate,
    current_teacher: UserModel = Depends(require_teacher),
    db: DatabaseService = Depends(get_db_service),
):
    try:
        sel_scores = student_service.update_sel_scores(student_id, sel_update, teacher_id=current_teacher.id, db=db)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if sel_scores is None:
        raise _not_found(student_id)
    return {"message": "SEL scores updated", "selScores": sel_scores}


@router.post("/{student_id}/suggestion", response_model=SuggestionResponse, summary="Get a Teaching Suggestion for a Stored Student")
async def suggest_for_student(
    student_id: str,
    current_teacher: UserModel = Depends(require_teacher),
    db: DatabaseService = Depends(get_db_service),
    gateway: GeminiGateway = Depends(get_gemini_gateway),
):
    suggestion_request = student_service.build_suggestion_request(student_id, teacher_id=current_teacher.id, db=db)
    if suggestion_request is None:
        raise _not_found(student_id)
    try:
        return await suggestion_service.get_teaching_suggestion(suggestion_request, gateway)
    except SuggestionGatewayError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
