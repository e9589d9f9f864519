from pydantic import BaseModel, Field, field_validator
from typing import Optional
import re

_EMAIL_RE = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


class UserUpsert(BaseModel):
    id: str = Field(..., min_length=1)
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None

    @field_validator('email')
    def validate_email_format(cls, v: str):
        if not _EMAIL_RE.match(v):
            raise ValueError('Invalid email format')
        return v.lower()


class UserOut(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None
    is_admin: bool = False
    last_login: Optional[str] = None
    created_at: Optional[str] = None


class GrantAdminRequest(BaseModel):
    target_user_id: str = Field(..., alias="targetUserId", min_length=1)
    is_admin: bool = Field(True, alias="isAdmin")

    model_config = {
        'populate_by_name': True
    }
