from pydantic import ConfigDict, Field
from typing import Dict, List, Literal, Optional
from datetime import datetime
from app.models.base import CamelModel
import time

def now_millis() -> int:
    return int(time.time() * 1000)

class ChatMessage(CamelModel):
    role: Literal["user", "assistant"]
    content: str
    timestamp: int = Field(default_factory=now_millis)  # epoch millis

    model_config = ConfigDict(frozen=True)

class ChatRequest(CamelModel):
    message: str
    language: Optional[str] = None

class ChatResponse(CamelModel):
    message: ChatMessage
    location: Optional[str] = None
    category: Optional[str] = None
    translations: Optional[Dict[str, str]] = None

class ConversationCreate(CamelModel):
    messages: List[ChatMessage] = []
    location: Optional[str] = None

class Conversation(CamelModel):
    id: int
    user_id: int
    messages: List[ChatMessage] = []
    location: Optional[str] = None
    created_at: datetime
