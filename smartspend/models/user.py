from pydantic import BaseModel, EmailStr, Field
from uuid import uuid4
from datetime import datetime

GUEST_USER_ID = "guest"


class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserInDB(BaseModel):
    user_id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    email: EmailStr
    password_hash: str
    created_at: str = Field(default_factory=lambda: datetime.utcnow().isoformat())


class UserPublic(BaseModel):
    user_id: str
    name: str
    email: str
    is_guest: bool = False


GUEST_USER = UserPublic(user_id=GUEST_USER_ID, name="Guest User", email="guest@local", is_guest=True)
