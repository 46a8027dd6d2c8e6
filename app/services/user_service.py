from sqlalchemy.orm import Session
from typing import Optional, Tuple
import logging

from app.models.user import User
from app.utils.errors import ValidationFailed
from app.utils.security import generate_api_key, hash_api_key

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def register_user(db: Session, name: Optional[str], date_of_birth: Optional[str]) -> Tuple[User, str]:
        """
        Create a user and issue an API key.
        Returns the user and the raw key; only its hash is stored.
        """
        if not name or not date_of_birth:
            raise ValidationFailed("MISSING_FIELDS", "Name and date_of_birth are required")

        api_key = generate_api_key()
        user = User(
            name=name,
            date_of_birth=date_of_birth,
            api_key_hash=hash_api_key(api_key),
        )
        db.add(user)
        db.commit()
        db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user, api_key

    @staticmethod
    def find_user_by_api_key(db: Session, api_key: str) -> Optional[User]:
        """Hash the presented key and look the digest up"""
        return db.query(User).filter(User.api_key_hash == hash_api_key(api_key)).first()

    @staticmethod
    def update_user(
        db: Session,
        user: User,
        name: Optional[str] = None,
        date_of_birth: Optional[str] = None,
    ) -> User:
        """Partial profile update; at least one non-empty field is required"""
        if not name and not date_of_birth:
            raise ValidationFailed("MISSING_FIELDS", "Provide name or date_of_birth to update")

        if name:
            user.name = name
        if date_of_birth:
            user.date_of_birth = date_of_birth

        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def rotate_api_key(db: Session, user: User) -> str:
        """Replace the user's key; the previous key stops working immediately"""
        api_key = generate_api_key()
        user.api_key_hash = hash_api_key(api_key)
        db.commit()

        logger.info(f"Rotated API key for user {user.id}")
        return api_key

    @staticmethod
    def delete_user(db: Session, user: User) -> None:
        """Delete a user together with their saved movies"""
        user_id = user.id
        db.delete(user)
        db.commit()
        logger.info(f"Deleted user {user_id}")
