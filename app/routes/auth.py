from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.auth import UserRegister, APIKeyResponse
from app.services.user_service import UserService

# Define router
router = APIRouter(tags=["Authentication"])


# Register a new user
@router.post("/register", response_model=APIKeyResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new user and receive an API key

    - **name**: display name (required)
    - **date_of_birth**: e.g. "2000-01-01" (required)

    The API key is returned only once. Send it back as `X-API-Key`
    or `Authorization: Bearer <key>`.
    """
    user, api_key = UserService.register_user(db, user_data.name, user_data.date_of_birth)
    return APIKeyResponse(user_id=user.id, api_key=api_key)
