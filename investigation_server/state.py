"""Application state: content provider, session store, engine and dispatcher."""

import logging
from typing import Any, Optional

from investigation import AudioEventDispatcher, InvestigationEngine

try:
    from .config import ServerConfig, get_config
    from .services import (
        FirestoreContentProvider,
        FirestoreSessionStore,
        InMemorySessionStore,
        JsonContentProvider,
    )
except ImportError:
    from config import ServerConfig, get_config
    from services import (
        FirestoreContentProvider,
        FirestoreSessionStore,
        InMemorySessionStore,
        JsonContentProvider,
    )

logger = logging.getLogger(__name__)


class AppState:
    """Global application state."""

    def __init__(
        self,
        config: ServerConfig,
        content: Optional[Any] = None,
        sessions: Optional[Any] = None,
    ):
        self.config = config
        self.content = content if content is not None else self._create_content_provider(config)
        self.sessions = sessions if sessions is not None else self._create_session_store(config)
        logger.info(
            "[startup] Content provider: %s, session store: %s",
            type(self.content).__name__,
            type(self.sessions).__name__,
        )
        self.engine = InvestigationEngine(self.content, self.sessions)
        self.dispatcher = AudioEventDispatcher(self.engine)

    @staticmethod
    def _firebase_credentials_ok(config: ServerConfig, what: str) -> bool:
        cred_path = config.firebase_credentials_path
        if not cred_path:
            logger.warning("[startup] %s: FIREBASE_CREDENTIALS_PATH not set", what)
            return False
        if not cred_path.exists() or not cred_path.is_file():
            logger.warning(
                "[startup] %s: credentials path not found or not a file: %s", what, cred_path
            )
            return False
        return True

    def _create_content_provider(self, config: ServerConfig) -> Any:
        """Create content provider (Firestore when selected and creds are usable, else JSON)."""
        if config.content_source == "firebase":
            if self._firebase_credentials_ok(config, "Firestore content provider skipped"):
                return FirestoreContentProvider(
                    project_id=config.firebase_project_id,
                    credentials_path=config.firebase_credentials_path,
                )
            logger.warning("[startup] Falling back to JSON content at %s", config.content_json_path)
        return JsonContentProvider.from_file(config.content_json_path)

    def _create_session_store(self, config: ServerConfig) -> Any:
        """Create session store (Firestore when selected and creds are usable, else in-memory)."""
        if config.session_store == "firebase":
            if self._firebase_credentials_ok(config, "Firestore session store skipped"):
                try:
                    return FirestoreSessionStore(
                        project_id=config.firebase_project_id,
                        credentials_path=config.firebase_credentials_path,
                        collection=config.firestore_sessions_collection,
                    )
                except Exception as e:
                    logger.warning("[startup] Firestore session store init failed: %s, using in-memory", e)
        return InMemorySessionStore()


_state: Optional[AppState] = None


def get_state() -> AppState:
    global _state
    if _state is None:
        config = get_config()
        _state = AppState(config)
    return _state


def reset_state(state: Optional[AppState] = None) -> None:
    """Replace (or clear) the global state; used by tests and config reloads."""
    global _state
    _state = state
