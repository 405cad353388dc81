"""
Quota and guard helpers.

Pure functions over a session snapshot; no store or content access, so the
quota rules can be exercised on their own.
"""

from typing import Optional

# Every major branch requires exactly this many minor branch picks
MAX_SUB_BRANCHES_PER_MAJOR = 2


def max_selectable_major(total_major: int) -> int:
    """
    Major branch quota for a podcast: floor(total / 2).

    With an odd total one branch stays unreachable for that run.
    """
    if total_major < 0:
        raise ValueError(f"total_major must be >= 0, got {total_major}")
    return total_major // 2


def can_select_major(session, total_major: int) -> bool:
    return len(session.selected_major_branches) < max_selectable_major(total_major)


def can_select_sub(session, major_branch_id: Optional[str]) -> bool:
    if major_branch_id is None:
        return False
    return session.sub_count(major_branch_id) < MAX_SUB_BRANCHES_PER_MAJOR


def is_major_selection_complete(session, total_major: int) -> bool:
    return len(session.selected_major_branches) == max_selectable_major(total_major)


def is_sub_selection_complete(session, major_branch_id: Optional[str]) -> bool:
    """True iff exactly two minor branches are picked under the major branch."""
    if major_branch_id is None:
        return False
    return session.sub_count(major_branch_id) == MAX_SUB_BRANCHES_PER_MAJOR
