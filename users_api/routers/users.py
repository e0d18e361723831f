"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from users_api.database import get_db
from users_api.schemas.user import UserCreate, UserDeletedResponse, UserResponse, UserUpdate
from users_api.services.user import get_user_service

router = APIRouter(prefix="/users", tags=["Users"])

# ids are 32-bit integer primary keys
UserId = Annotated[int, Path(ge=1, le=2_147_483_647)]


@router.get("", response_model=list[UserResponse])
def list_users(db: Session = Depends(get_db)) -> list[UserResponse]:
    """List all users."""
    service = get_user_service()
    return [UserResponse.model_validate(row) for row in service.list_users(db)]


@router.get("/{user_id}", response_model=list[UserResponse])
def get_user(user_id: UserId, db: Session = Depends(get_db)) -> list[UserResponse]:
    """Get the user with the given id, wrapped in a list."""
    service = get_user_service()
    return [UserResponse.model_validate(row) for row in service.get_user(db, user_id)]


@router.post("", response_model=UserResponse)
def create_user(body: UserCreate, db: Session = Depends(get_db)) -> UserResponse:
    """Create a user. The password is stored as a bcrypt hash."""
    service = get_user_service()
    return UserResponse.model_validate(service.create_user(db, body))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: UserId, body: UserUpdate, db: Session = Depends(get_db)) -> UserResponse:
    """Update a user. Omitting the password keeps the stored hash."""
    service = get_user_service()
    return UserResponse.model_validate(service.update_user(db, user_id, body))


@router.delete("/{user_id}", response_model=UserDeletedResponse)
def delete_user(user_id: UserId, db: Session = Depends(get_db)) -> UserDeletedResponse:
    """Delete a user and return the deleted row."""
    service = get_user_service()
    row = service.delete_user(db, user_id)
    return UserDeletedResponse(message="User deleted", user=UserResponse.model_validate(row))
