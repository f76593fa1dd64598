from typing import Optional
from datetime import datetime
from app.models.base import CamelModel

class SearchHistoryEntry(CamelModel):
    id: int
    user_id: int
    search_query: str
    location: Optional[str] = None
    category: Optional[str] = None
    timestamp: datetime
