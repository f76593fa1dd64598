from fastapi import APIRouter, HTTPException, status, Depends, Response
from app.database.connection import get_storage
from app.database.storage import MemStorage
from app.models.favorite import Favorite, FavoriteCreate
from app.models.user import UserInDB
from app.routes.auth_route import get_current_user
from typing import List
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/favorites", response_model=List[Favorite])
def list_favorites(user: UserInDB = Depends(get_current_user),
                   storage: MemStorage = Depends(get_storage)):
    return storage.list_favorites(user.id)


@router.post("/favorites", response_model=Favorite)
def add_favorite(favorite: FavoriteCreate,
                 user: UserInDB = Depends(get_current_user),
                 storage: MemStorage = Depends(get_storage)):
    created = storage.add_favorite(user.id, favorite.location, favorite.notes)
    logger.info(f"Favorite {created.id} added for user {user.id}: {created.location}")
    return created


@router.delete("/favorites/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_favorite(favorite_id: int,
                    user: UserInDB = Depends(get_current_user),
                    storage: MemStorage = Depends(get_storage)):
    """Only the owner may delete; deleting a missing favorite is a no-op."""
    try:
        favorite = storage.get_favorite(favorite_id)
        if favorite is not None and favorite.user_id != user.id:
            logger.warning(f"User {user.id} tried to delete favorite {favorite_id} owned by {favorite.user_id}")
            raise HTTPException(status_code=403, detail="You can only delete your own favorites")

        if not storage.delete_favorite(favorite_id):
            logger.info(f"Favorite {favorite_id} already absent")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting favorite {favorite_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
