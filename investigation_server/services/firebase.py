"""
Shared Firebase app bootstrap for the Firestore-backed services.

FirestoreContentProvider and FirestoreSessionStore reuse the same default app
(same credentials_path and project_id).
"""

from pathlib import Path
from typing import Any, Optional, Union


def firestore_client(
    project_id: Optional[str] = None,
    credentials_path: Optional[Union[Path, str]] = None,
    *,
    owner: str = "Firestore services",
) -> Any:
    """Initialize the default Firebase app once and return a Firestore client."""
    try:
        import firebase_admin
        from firebase_admin import credentials, firestore
    except ImportError:
        raise ImportError(f"firebase-admin is required for {owner}. pip install firebase-admin")
    if not firebase_admin._apps:
        if credentials_path:
            cred = credentials.Certificate(str(Path(credentials_path).resolve()))
            opts = {"projectId": project_id} if project_id else None
            firebase_admin.initialize_app(cred, opts)
        else:
            firebase_admin.initialize_app(options={"projectId": project_id} if project_id else None)
    return firestore.client()
