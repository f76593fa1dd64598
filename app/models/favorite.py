from typing import Optional
from datetime import datetime
from pydantic import Field
from app.models.base import CamelModel

class FavoriteCreate(CamelModel):
    location: str = Field(min_length=1)
    notes: Optional[str] = None

class Favorite(CamelModel):
    id: int
    user_id: int
    location: str
    notes: Optional[str] = None
    created_at: datetime
