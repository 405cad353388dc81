"""
Audio Investigation API Server

Usage: uvicorn investigation_server:app --reload --port 8000
"""

from .app import app, create_app
from .config import ServerConfig, get_config, reload_config
from .services import (
    ContentProvider,
    FirestoreContentProvider,
    FirestoreSessionStore,
    InMemorySessionStore,
    JsonContentProvider,
    SessionStore,
)
from .state import AppState, get_state, reset_state

__all__ = [
    "app",
    "create_app",
    "ServerConfig",
    "get_config",
    "reload_config",
    "ContentProvider",
    "FirestoreContentProvider",
    "FirestoreSessionStore",
    "InMemorySessionStore",
    "JsonContentProvider",
    "SessionStore",
    "AppState",
    "get_state",
    "reset_state",
]
