from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader, HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
import logging

from app.database import get_db
from app.models.user import User
from app.services.user_service import UserService
from app.utils.errors import Forbidden, Unauthorized
from app.utils.filters import parse_uuid

logger = logging.getLogger(__name__)

# Either header may carry the key; X-API-Key wins when both are sent
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


async def get_raw_body(request: Request) -> bytes:
    """Unparsed request body, so the route decides when the payload is validated"""
    return await request.body()


# Dependency to get the current authenticated user
def get_current_user(
    api_key: Optional[str] = Security(api_key_header),
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    if not api_key and credentials is not None:
        api_key = credentials.credentials

    if not api_key:
        raise Unauthorized("API key required")

    user = UserService.find_user_by_api_key(db, api_key)
    if user is None:
        logger.warning("Rejected request with unknown API key")
        raise Unauthorized("Invalid API key")

    return user


def require_path_user(user_id: str, current_user: User) -> UUID:
    """
    Validate a {user_id} path segment and make sure it names the caller.
    Keys only grant access to their own user's resources.
    """
    parsed = parse_uuid(user_id, "INVALID_USER_ID", "Invalid user ID format")
    if parsed != current_user.id:
        raise Forbidden()
    return parsed
