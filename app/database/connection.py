from fastapi import Request
from app.config.settings import Settings
from app.database.storage import MemStorage
import logging

logger = logging.getLogger(__name__)

def create_storage() -> MemStorage:
    storage = MemStorage()
    logger.info("In-memory storage initialized")
    return storage

def get_storage(request: Request) -> MemStorage:
    """FastAPI dependency returning the store built at startup."""
    return request.app.state.storage

def get_settings(request: Request) -> Settings:
    return request.app.state.settings
