import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status

from smartspend.core.security import create_access_token, decode_access_token, get_password_hash, verify_password
from smartspend.db import dynamo
from smartspend.models.user import GUEST_USER, GUEST_USER_ID, UserCreate, UserInDB, UserLogin, UserPublic

router = APIRouter()
logger = logging.getLogger(__name__)


def get_current_user_id(authorization: Optional[str] = Header(None)) -> str:
    """Extract user_id from JWT token"""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token required")

    token = authorization.replace("Bearer ", "")
    payload = decode_access_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return user_id


def _token_response(user: UserPublic) -> dict:
    return {
        "access_token": create_access_token(data={"sub": user.user_id}),
        "token_type": "bearer",
        "user": user.model_dump(),
    }


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(user: UserCreate):
    if dynamo.get_user_by_email(user.email):
        raise HTTPException(status_code=400, detail="Email is already in use.")

    user_db = UserInDB(
        name=user.name,
        email=user.email,
        password_hash=get_password_hash(user.password),
    )
    if not dynamo.put_user(user_db.model_dump()):
        raise HTTPException(status_code=500, detail="Error saving user")

    logger.info(f"Registered user {user_db.user_id}")
    return _token_response(UserPublic(user_id=user_db.user_id, name=user_db.name, email=user_db.email))


@router.post("/login")
def login(login_data: UserLogin):
    logger.info(f"Login attempt for email: {login_data.email}")
    user = dynamo.get_user_by_email(login_data.email)

    if not user:
        logger.warning(f"User not found: {login_data.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="No account found with this email.")

    if not verify_password(login_data.password, user["password_hash"]):
        logger.warning(f"Invalid password for user: {login_data.email}")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect password.")

    return _token_response(
        UserPublic(user_id=user["user_id"], name=user.get("name") or "User", email=user["email"])
    )


@router.post("/guest")
def login_as_guest():
    """Guest session: data is kept in the local store, no account needed."""
    return _token_response(GUEST_USER)


@router.get("/me", response_model=UserPublic)
def get_current_user(user_id: str = Depends(get_current_user_id)):
    """Get current user profile"""
    if user_id == GUEST_USER_ID:
        return GUEST_USER

    user = dynamo.get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return UserPublic(user_id=user["user_id"], name=user.get("name") or "User", email=user["email"])
