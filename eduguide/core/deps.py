# /eduguide/core/deps.py

"""
FastAPI dependencies that resolve the authenticated user and enforce the two
fixed roles.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from .config import Settings, get_settings
from .security import decode_access_token
from ..db.models.user_model import User as UserModel
from ..models.user_model import Role
from ..services.database_service import DatabaseService, get_db_service

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: DatabaseService = Depends(get_db_service),
    settings: Settings = Depends(get_settings),
) -> UserModel:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token, settings)
    except ValueError:
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    user = db.get_user_by_id(user_id)
    if user is None:
        raise credentials_exception
    return user


def _require_role(role: Role):
    def dependency(current_user: UserModel = Depends(get_current_user)) -> UserModel:
        if current_user.role != role.value:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"This action requires the '{role.value}' role.",
            )
        return current_user
    return dependency


require_admin = _require_role(Role.ADMIN)
require_teacher = _require_role(Role.TEACHER)
