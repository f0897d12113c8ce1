# /eduguide/routers/auth_router.py

"""
This module defines the API for authentication-related actions.

It includes endpoints for:
- Teacher self-registration (`/register`) and admin-created users (`/users`)
- User login and token generation (`/token`)
- Retrieving the current user's profile (`/me`)
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

# --- Application-specific Imports ---
from ..core import security
from ..core.config import Settings, get_settings
from ..core.deps import get_current_user, require_admin
from ..db.models.user_model import User as UserModel
from ..models.user_model import Role, User, UserCreate, Token
from ..services import user_service
from ..services.database_service import DatabaseService, get_db_service

# --- Router Initialization ---
router = APIRouter()


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: DatabaseService = Depends(get_db_service)
):
    """
    Handles open self-registration, which only ever creates teachers. Admin
    accounts come from `/users` or the startup seed. A duplicate email is
    reported as a 400.
    """
    if user_in.role != Role.TEACHER:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin accounts can only be created by an administrator.",
        )
    try:
        return user_service.create_user(db=db, user=user_in)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.post("/users", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user_as_admin(
    user_in: UserCreate,
    current_admin: UserModel = Depends(require_admin),
    db: DatabaseService = Depends(get_db_service)
):
    """Lets an administrator create a user with either role."""
    try:
        return user_service.create_user(db=db, user=user_in)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: DatabaseService = Depends(get_db_service),
    settings: Settings = Depends(get_settings),
):
    """
    Handles user login, compatible with the OAuth2 Password Flow. The email is
    sent in the 'username' field.
    """
    user = user_service.authenticate_user(
        db, email=form_data.username, password=form_data.password
    )
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = security.create_access_token(subject=user.id, settings=settings, role=user.role)
    return Token(access_token=access_token, token_type="bearer")


@router.get("/me", response_model=User)
def read_current_user(
    current_user: UserModel = Depends(get_current_user)
):
    """Retrieves the profile of the currently authenticated user."""
    return current_user
