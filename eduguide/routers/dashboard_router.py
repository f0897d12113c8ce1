# /eduguide/routers/dashboard_router.py

# --- Core FastAPI Imports ---
from fastapi import APIRouter, Depends

# --- Service and Model Imports ---
from ..core.deps import require_teacher
from ..db.models.user_model import User as UserModel
from ..services import dashboard_service
from ..services.database_service import DatabaseService, get_db_service
from ..models.dashboard_model import DashboardSummary

router = APIRouter()


@router.get(
    "/summary",
    response_model=DashboardSummary,
    summary="Get Dashboard Summary",
    description="Roster statistics and the students needing attention for the teacher dashboard."
)
def get_dashboard_summary(
    current_teacher: UserModel = Depends(require_teacher),
    db: DatabaseService = Depends(get_db_service)
):
    """
    Thin router layer: delegates the aggregation to the dashboard service.
    """
    return dashboard_service.get_summary_data(teacher_id=current_teacher.id, db=db)
