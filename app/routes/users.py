from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.auth import APIKeyResponse, UserResponse, UserUpdate
from app.services.user_service import UserService
from app.utils.dependencies import get_current_user, require_path_user

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
):
    """Get the authenticated user's profile"""
    require_path_user(user_id, current_user)
    return current_user


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    update_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update profile fields

    - **name**: new display name
    - **date_of_birth**: new date of birth
    """
    require_path_user(user_id, current_user)
    return UserService.update_user(db, current_user, update_data.name, update_data.date_of_birth)


@router.post("/{user_id}/api-key", response_model=APIKeyResponse)
def rotate_api_key(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Issue a new API key; the key used for this request stops working"""
    require_path_user(user_id, current_user)
    api_key = UserService.rotate_api_key(db, current_user)
    return APIKeyResponse(user_id=current_user.id, api_key=api_key)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete the account and all of its saved movies"""
    require_path_user(user_id, current_user)
    UserService.delete_user(db, current_user)
    return None
