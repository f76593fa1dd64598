from app.models.user import UserInDB
from app.models.favorite import Favorite
from app.models.history import SearchHistoryEntry
from app.models.chat import ChatMessage, Conversation
from app.models.travel import WeatherCacheEntry
from typing import Any, Dict, List, Optional
from datetime import datetime
import itertools, threading, logging

logger = logging.getLogger(__name__)

class UnknownUserError(KeyError):
    """Raised when a record would reference a user that does not exist."""

class MemStorage:
    """
    In-memory storage for users, search history, favorites, conversations
    and the weather cache. Every public method holds ``self._lock`` so that
    handlers running in the thread pool never interleave writes.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._users: Dict[int, UserInDB] = {}
        self._history: Dict[int, SearchHistoryEntry] = {}
        self._favorites: Dict[int, Favorite] = {}
        self._conversations: Dict[int, Conversation] = {}
        self._weather_cache: Dict[str, WeatherCacheEntry] = {}
        self._counters = {
            kind: itertools.count(1)
            for kind in ("user", "history", "favorite", "conversation", "weather")
        }

    def _next_id(self, kind: str) -> int:
        return next(self._counters[kind])

    def _require_user(self, user_id: int):
        if user_id not in self._users:
            raise UnknownUserError(f"User {user_id} does not exist")

    # ****************************************************
    #  Users
    # ****************************************************

    def create_user(self, email: str, password_hash: str) -> UserInDB:
        email = email.strip().lower()
        with self._lock:
            if any(u.email == email for u in self._users.values()):
                raise ValueError("Email already registered")

            user = UserInDB(
                id=self._next_id("user"),
                email=email,
                password_hash=password_hash,
                created_at=datetime.now(),
            )
            self._users[user.id] = user
            logger.info(f"User created with id: {user.id}")
            return user

    def get_user(self, user_id: int) -> Optional[UserInDB]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        email = email.strip().lower()
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user
            return None

    # ****************************************************
    #  Search history
    # ****************************************************

    def record_search(self, user_id: int, query: str,
                      location: Optional[str] = None,
                      category: Optional[str] = None) -> SearchHistoryEntry:
        with self._lock:
            self._require_user(user_id)
            entry = SearchHistoryEntry(
                id=self._next_id("history"),
                user_id=user_id,
                search_query=query,
                location=location,
                category=category,
                timestamp=datetime.now(),
            )
            self._history[entry.id] = entry
            return entry

    def get_user_history(self, user_id: int) -> List[SearchHistoryEntry]:
        """Newest first, in insertion order."""
        with self._lock:
            entries = [e for e in self._history.values() if e.user_id == user_id]
        entries.sort(key=lambda e: e.id, reverse=True)
        return entries

    # ****************************************************
    #  Favorites
    # ****************************************************

    def list_favorites(self, user_id: int) -> List[Favorite]:
        with self._lock:
            return [f for f in self._favorites.values() if f.user_id == user_id]

    def add_favorite(self, user_id: int, location: str, notes: Optional[str] = None) -> Favorite:
        with self._lock:
            self._require_user(user_id)
            favorite = Favorite(
                id=self._next_id("favorite"),
                user_id=user_id,
                location=location,
                notes=notes,
                created_at=datetime.now(),
            )
            self._favorites[favorite.id] = favorite
            return favorite

    def get_favorite(self, favorite_id: int) -> Optional[Favorite]:
        with self._lock:
            return self._favorites.get(favorite_id)

    def delete_favorite(self, favorite_id: int) -> bool:
        with self._lock:
            return self._favorites.pop(favorite_id, None) is not None

    # ****************************************************
    #  Conversations
    # ****************************************************

    def create_conversation(self, user_id: int, messages: List[ChatMessage],
                            location: Optional[str] = None) -> Conversation:
        with self._lock:
            self._require_user(user_id)
            conversation = Conversation(
                id=self._next_id("conversation"),
                user_id=user_id,
                messages=list(messages),
                location=location,
                created_at=datetime.now(),
            )
            self._conversations[conversation.id] = conversation
            return conversation

    def get_conversation(self, conversation_id: int) -> Optional[Conversation]:
        with self._lock:
            return self._conversations.get(conversation_id)

    # ****************************************************
    #  Weather cache
    # ****************************************************

    def get_weather_cache(self, location: str) -> Optional[WeatherCacheEntry]:
        with self._lock:
            return self._weather_cache.get(location.strip().lower())

    def update_weather_cache(self, location: str, data: Dict[str, Any]) -> WeatherCacheEntry:
        with self._lock:
            entry = WeatherCacheEntry(
                id=self._next_id("weather"),
                location=location,
                data=data,
                updated_at=datetime.now(),
            )
            self._weather_cache[location.strip().lower()] = entry
            return entry

    def clear(self):
        with self._lock:
            self._users.clear()
            self._history.clear()
            self._favorites.clear()
            self._conversations.clear()
            self._weather_cache.clear()
