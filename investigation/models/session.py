"""
Session model: the mutable per-run progress record.

Selections are only ever added through add_major_branch / add_sub_branch so
the uniqueness and per-branch size rules hold at the point of insertion.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..errors import DuplicateSelection, QuotaExceeded
from ..quotas import MAX_SUB_BRANCHES_PER_MAJOR
from ..states import SessionState


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class InvestigationSession(BaseModel):
    """Server-held progress of one listener through one podcast."""

    session_id: str
    podcast_id: str
    selected_major_branches: List[str] = Field(default_factory=list)
    selected_sub_branches: Dict[str, List[str]] = Field(default_factory=dict)
    state: SessionState = SessionState.INTRO
    current_major_branch_id: Optional[str] = None
    created_at: str = Field(default_factory=_utc_now)
    revision: int = 0

    def sub_branches_for(self, major_branch_id: str) -> List[str]:
        """Minor branches picked under a major branch, in pick order."""
        return list(self.selected_sub_branches.get(major_branch_id, []))

    def sub_count(self, major_branch_id: Optional[str]) -> int:
        if major_branch_id is None:
            return 0
        return len(self.selected_sub_branches.get(major_branch_id, []))

    def add_major_branch(self, major_branch_id: str, max_major: int) -> None:
        if major_branch_id in self.selected_major_branches:
            raise DuplicateSelection(f"Major branch already selected: {major_branch_id}")
        if len(self.selected_major_branches) >= max_major:
            raise QuotaExceeded(f"Cannot select more than {max_major} major branch(es)")
        self.selected_major_branches.append(major_branch_id)

    def add_sub_branch(self, major_branch_id: str, sub_branch_id: str) -> None:
        picks = self.selected_sub_branches.setdefault(major_branch_id, [])
        if sub_branch_id in picks:
            raise DuplicateSelection(f"Sub branch already selected: {sub_branch_id}")
        if len(picks) >= MAX_SUB_BRANCHES_PER_MAJOR:
            raise QuotaExceeded(
                f"Cannot select more than {MAX_SUB_BRANCHES_PER_MAJOR} sub branch(es) for this major branch"
            )
        picks.append(sub_branch_id)
