"""Backing logic: content providers and session stores."""

from .content_provider import ContentProvider, FirestoreContentProvider, JsonContentProvider
from .firestore_session_store import FirestoreSessionStore
from .session_store import InMemorySessionStore, SessionStore

__all__ = [
    "ContentProvider",
    "FirestoreContentProvider",
    "JsonContentProvider",
    "FirestoreSessionStore",
    "InMemorySessionStore",
    "SessionStore",
]
