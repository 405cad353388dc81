"""
Content Provider abstraction.

Read-only access to narrative content: podcasts, major branches, minor
branches, accusations. Implementations: JSON file (local/dev/tests) and
Firestore (cloud). Content is immutable for the lifetime of any session.
"""

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Union

from investigation.models import Accusation, MajorBranch, MinorBranch, Podcast

from .firebase import firestore_client

logger = logging.getLogger(__name__)


class ContentProvider(Protocol):
    """Protocol for narrative content lookups. Absent ids return None."""

    def get_podcast(self, podcast_id: str) -> Optional[Podcast]:
        ...

    def list_podcasts(self) -> List[Podcast]:
        ...

    def list_major_branches(self, podcast_id: str) -> List[MajorBranch]:
        """Major branches of a podcast in authoring order (empty if none)."""
        ...

    def list_minor_branches(self, major_branch_id: str) -> List[MinorBranch]:
        ...

    def list_accusations(self, podcast_id: str) -> List[Accusation]:
        ...

    def get_major_branch(self, major_branch_id: str) -> Optional[MajorBranch]:
        ...

    def get_minor_branch(self, minor_branch_id: str) -> Optional[MinorBranch]:
        ...

    def get_accusation(self, accusation_id: str) -> Optional[Accusation]:
        ...


class JsonContentProvider:
    """
    Content provider backed by one JSON document:

        {
          "podcasts": [...],
          "mainBranches": [...],
          "subBranches": [...],
          "accusations": [...]
        }

    Keys may be camelCase (authoring tool export) or snake_case.
    Used when CONTENT_SOURCE=json; path comes from CONTENT_JSON_PATH.
    """

    def __init__(self, data: Dict[str, List[Dict[str, Any]]]):
        self._podcasts = {p.id: p for p in (Podcast.model_validate(d) for d in data.get("podcasts", []))}
        majors = [MajorBranch.model_validate(d) for d in _section(data, "mainBranches", "major_branches")]
        minors = [MinorBranch.model_validate(d) for d in _section(data, "subBranches", "minor_branches")]
        accusations = [Accusation.model_validate(d) for d in data.get("accusations", [])]

        self._majors = {m.id: m for m in majors}
        self._minors = {m.id: m for m in minors}
        self._accusations = {a.id: a for a in accusations}
        self._majors_by_podcast: Dict[str, List[MajorBranch]] = defaultdict(list)
        for m in majors:
            self._majors_by_podcast[m.podcast_id].append(m)
        self._minors_by_major: Dict[str, List[MinorBranch]] = defaultdict(list)
        for m in minors:
            self._minors_by_major[m.major_branch_id].append(m)
        self._accusations_by_podcast: Dict[str, List[Accusation]] = defaultdict(list)
        for a in accusations:
            self._accusations_by_podcast[a.podcast_id].append(a)

    @classmethod
    def from_file(cls, path: Union[Path, str]) -> "JsonContentProvider":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Content JSON not found: {path}")
        with open(path) as f:
            data = json.load(f)
        provider = cls(data)
        logger.info(
            "[content] loaded %d podcast(s), %d major and %d minor branches from %s",
            len(provider._podcasts),
            len(provider._majors),
            len(provider._minors),
            path,
        )
        return provider

    def get_podcast(self, podcast_id: str) -> Optional[Podcast]:
        return self._podcasts.get(podcast_id)

    def list_podcasts(self) -> List[Podcast]:
        return list(self._podcasts.values())

    def list_major_branches(self, podcast_id: str) -> List[MajorBranch]:
        return list(self._majors_by_podcast.get(podcast_id, []))

    def list_minor_branches(self, major_branch_id: str) -> List[MinorBranch]:
        return list(self._minors_by_major.get(major_branch_id, []))

    def list_accusations(self, podcast_id: str) -> List[Accusation]:
        return list(self._accusations_by_podcast.get(podcast_id, []))

    def get_major_branch(self, major_branch_id: str) -> Optional[MajorBranch]:
        return self._majors.get(major_branch_id)

    def get_minor_branch(self, minor_branch_id: str) -> Optional[MinorBranch]:
        return self._minors.get(minor_branch_id)

    def get_accusation(self, accusation_id: str) -> Optional[Accusation]:
        return self._accusations.get(accusation_id)


def _section(data: Dict[str, Any], *keys: str) -> List[Dict[str, Any]]:
    for key in keys:
        if key in data:
            return data[key]
    return []


class FirestoreContentProvider:
    """
    Content provider backed by Cloud Firestore.

    One collection per record type (default names match the authoring tool:
    podcasts, mainBranches, subBranches, accusations). Document id is the
    record id; parent links are the podcastId / mainBranchId fields.
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        *,
        podcasts_collection: str = "podcasts",
        major_branches_collection: str = "mainBranches",
        minor_branches_collection: str = "subBranches",
        accusations_collection: str = "accusations",
    ):
        self._db = firestore_client(project_id, credentials_path, owner="FirestoreContentProvider")
        self._podcasts = self._db.collection(podcasts_collection)
        self._majors = self._db.collection(major_branches_collection)
        self._minors = self._db.collection(minor_branches_collection)
        self._accusations = self._db.collection(accusations_collection)

    @staticmethod
    def _doc_to_dict(doc: Any) -> Dict:
        d = doc.to_dict()
        d["id"] = doc.id
        return d

    def _get(self, coll: Any, model: Any, doc_id: str) -> Any:
        if not doc_id:
            return None
        doc = coll.document(doc_id).get()
        if not doc.exists:
            return None
        return model.model_validate(self._doc_to_dict(doc))

    def _children(self, coll: Any, model: Any, parent_field: str, parent_id: str) -> List[Any]:
        docs = coll.where(parent_field, "==", parent_id).stream()
        return [model.model_validate(self._doc_to_dict(d)) for d in docs]

    def get_podcast(self, podcast_id: str) -> Optional[Podcast]:
        return self._get(self._podcasts, Podcast, podcast_id)

    def list_podcasts(self) -> List[Podcast]:
        return [Podcast.model_validate(self._doc_to_dict(d)) for d in self._podcasts.stream()]

    def list_major_branches(self, podcast_id: str) -> List[MajorBranch]:
        return self._children(self._majors, MajorBranch, "podcastId", podcast_id)

    def list_minor_branches(self, major_branch_id: str) -> List[MinorBranch]:
        return self._children(self._minors, MinorBranch, "mainBranchId", major_branch_id)

    def list_accusations(self, podcast_id: str) -> List[Accusation]:
        return self._children(self._accusations, Accusation, "podcastId", podcast_id)

    def get_major_branch(self, major_branch_id: str) -> Optional[MajorBranch]:
        return self._get(self._majors, MajorBranch, major_branch_id)

    def get_minor_branch(self, minor_branch_id: str) -> Optional[MinorBranch]:
        return self._get(self._minors, MinorBranch, minor_branch_id)

    def get_accusation(self, accusation_id: str) -> Optional[Accusation]:
        return self._get(self._accusations, Accusation, accusation_id)
