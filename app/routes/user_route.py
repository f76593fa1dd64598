from fastapi import APIRouter, Depends
from app.database.connection import get_storage
from app.database.storage import MemStorage
from app.models.history import SearchHistoryEntry
from app.models.user import UserInDB, UserOut
from app.routes.auth_route import get_current_user
from typing import List

router = APIRouter()

@router.get("/user", response_model=UserOut)
def get_profile(user: UserInDB = Depends(get_current_user)):
    return UserOut(**user.model_dump())


@router.get("/user/history", response_model=List[SearchHistoryEntry])
def get_user_history(user: UserInDB = Depends(get_current_user),
                     storage: MemStorage = Depends(get_storage)):
    """Caller's search history, newest first."""
    return storage.get_user_history(user.id)
