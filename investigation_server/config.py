"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Single .env at project root
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)

BASE_DIR = Path(__file__).resolve().parent.parent


@dataclass
class ServerConfig:
    """Server configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Content source: "json" | "firebase"
    content_source: str = "json"
    content_json_path: Path = BASE_DIR / "data" / "sample_podcast.json"

    # Session store: "memory" | "firebase"
    session_store: str = "memory"
    firestore_sessions_collection: str = "investigation_sessions"

    # When either source is firebase: service account JSON and optional project id
    firebase_credentials_path: Optional[Path] = None
    firebase_project_id: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        content_source = os.getenv("CONTENT_SOURCE", "").strip().lower() or "json"
        if content_source not in ("json", "firebase"):
            content_source = "json"
        session_store = os.getenv("SESSION_STORE", "").strip().lower() or "memory"
        if session_store not in ("memory", "firebase"):
            session_store = "memory"

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (BASE_DIR / p).resolve()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            content_source=content_source,
            content_json_path=_path_env("CONTENT_JSON_PATH", BASE_DIR / "data" / "sample_podcast.json"),
            session_store=session_store,
            firestore_sessions_collection=os.getenv("FIRESTORE_SESSIONS_COLLECTION", "investigation_sessions"),
            firebase_credentials_path=_path_env("FIREBASE_CREDENTIALS_PATH") or _path_env("GOOGLE_APPLICATION_CREDENTIALS"),
            firebase_project_id=os.getenv("FIREBASE_PROJECT_ID") or None,
        )

    @property
    def uses_firebase(self) -> bool:
        return self.content_source == "firebase" or self.session_store == "firebase"

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.content_source == "json" and not self.content_json_path.exists():
            errors.append(f"Content JSON not found: {self.content_json_path}")

        if self.uses_firebase:
            cred = self.firebase_credentials_path
            if not cred:
                errors.append("FIREBASE_CREDENTIALS_PATH is required when a Firebase source is selected")
            elif not cred.is_file():
                errors.append(f"Firebase credentials file not found: {cred}")

        return len(errors) == 0, errors


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
