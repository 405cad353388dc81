"""
Firestore session store: one document per session in the sessions collection.

update() runs inside a Firestore transaction, so concurrent transitions on the
same session serialize (Firestore retries the losing transaction, which
re-reads the committed record and re-evaluates the guard).
"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

from investigation.errors import NotFound
from investigation.models import InvestigationSession

from .firebase import firestore_client

DEFAULT_SESSIONS_COLLECTION = "investigation_sessions"


class FirestoreSessionStore:
    """Session store backed by a Firestore collection (document id = session_id)."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        *,
        collection: str = DEFAULT_SESSIONS_COLLECTION,
    ):
        self._db = firestore_client(project_id, credentials_path, owner="FirestoreSessionStore")
        self._coll = self._db.collection(collection)

    @staticmethod
    def _to_doc(session: InvestigationSession) -> Dict:
        return session.model_dump(mode="json")

    @staticmethod
    def _from_snapshot(snapshot: Any) -> InvestigationSession:
        d = snapshot.to_dict()
        d["session_id"] = snapshot.id
        return InvestigationSession.model_validate(d)

    def create(self, session: InvestigationSession) -> None:
        from google.api_core.exceptions import AlreadyExists

        try:
            self._coll.document(session.session_id).create(self._to_doc(session))
        except AlreadyExists:
            raise ValueError(f"Session already exists: {session.session_id}")

    def get(self, session_id: str) -> Optional[InvestigationSession]:
        snapshot = self._coll.document(session_id).get()
        if not snapshot.exists:
            return None
        return self._from_snapshot(snapshot)

    def update(
        self,
        session_id: str,
        fn: Callable[[InvestigationSession], Any],
    ) -> Tuple[InvestigationSession, Any]:
        from firebase_admin import firestore

        doc_ref = self._coll.document(session_id)

        @firestore.transactional
        def _run(transaction):
            snapshot = doc_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise NotFound("Session", session_id)
            working = self._from_snapshot(snapshot)
            result = fn(working)
            transaction.set(doc_ref, self._to_doc(working))
            return working, result

        return _run(self._db.transaction())

    def delete(self, session_id: str) -> bool:
        doc_ref = self._coll.document(session_id)
        if not doc_ref.get().exists:
            return False
        doc_ref.delete()
        return True
