from fastapi import APIRouter, HTTPException, Depends, Request
from app.config.settings import Settings
from app.database.connection import get_settings, get_storage
from app.database.storage import MemStorage
from app.models.user import UserCreate, UserLogin, UserInDB, UserOut
from app.utils.security import hash_password, verify_password
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

SESSION_USER_KEY = "user_id"

def get_current_user(request: Request, storage: MemStorage = Depends(get_storage)) -> UserInDB:
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        logger.warning("No session in request")
        raise HTTPException(status_code=401, detail="Not authenticated")

    user = storage.get_user(user_id)
    if user is None:
        logger.warning(f"Session references unknown user {user_id}")
        request.session.clear()
        raise HTTPException(status_code=401, detail="Invalid session")

    return user


@router.post("/register", response_model=UserOut)
def register(user: UserCreate, request: Request, storage: MemStorage = Depends(get_storage),
             app_settings: Settings = Depends(get_settings)):
    email = user.email.strip().lower()

    allowed = app_settings.allowed_emails
    if allowed and email not in allowed:
        logger.warning(f"Registration rejected for {email}: not on the allow-list")
        raise HTTPException(status_code=400, detail="Registration is restricted for this email address")

    try:
        created = storage.create_user(email, hash_password(user.password))
    except ValueError as e:
        logger.warning(f"Registration failed for {email}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    request.session[SESSION_USER_KEY] = created.id
    logger.info(f"User registered: {created.id}")
    return UserOut(**created.model_dump())


@router.post("/login", response_model=UserOut)
def login(credentials: UserLogin, request: Request, storage: MemStorage = Depends(get_storage)):
    user = storage.get_user_by_email(credentials.email)
    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.warning(f"Failed login for {credentials.email}")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    request.session[SESSION_USER_KEY] = user.id
    logger.info(f"User logged in: {user.id}")
    return UserOut(**user.model_dump())


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"message": "Logged out"}
