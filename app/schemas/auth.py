from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Optional
from uuid import UUID

from app.schemas.validation import SafeStringMixin


# Schema for user registration
# Fields are optional here so that missing values surface as MISSING_FIELDS
# instead of a generic validation error
class UserRegister(BaseModel, SafeStringMixin):
    name: Optional[str] = Field(None, max_length=255)
    date_of_birth: Optional[str] = Field(None, max_length=32)

    @field_validator('name')
    @classmethod
    def clean_name(cls, v):
        if v is None:
            return v
        v = cls.validate_no_script(v)
        return cls.sanitize_html(v).strip()

    @field_validator('date_of_birth')
    @classmethod
    def strip_date_of_birth(cls, v):
        return v.strip() if v is not None else v


# Schema for profile updates (partial)
class UserUpdate(UserRegister):
    pass


# Schema for registration / key rotation response
class APIKeyResponse(BaseModel):
    user_id: UUID
    api_key: str


# Schema for user response
class UserResponse(BaseModel):
    id: UUID
    name: str
    date_of_birth: str
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
