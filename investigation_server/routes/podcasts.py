"""Content catalog endpoints (read-only)."""

from fastapi import APIRouter

from investigation import max_selectable_major
from investigation.errors import InvestigationError

try:
    from ..state import get_state
    from ..utils import to_http_exception
except ImportError:
    from state import get_state
    from utils import to_http_exception

router = APIRouter()
branches_router = APIRouter()


@router.get("")
def list_podcasts():
    """List podcasts available to start a session with."""
    state = get_state()
    podcasts = state.content.list_podcasts()
    return {"podcasts": [p.model_dump() for p in podcasts], "total": len(podcasts)}


@router.get("/{podcast_id}")
def get_podcast(podcast_id: str):
    state = get_state()
    try:
        return state.engine.get_podcast(podcast_id).model_dump()
    except InvestigationError as e:
        raise to_http_exception(e)


@router.get("/{podcast_id}/major-branches")
def list_major_branches(podcast_id: str):
    state = get_state()
    try:
        branches = state.engine.list_major_branches(podcast_id)
    except InvestigationError as e:
        raise to_http_exception(e)
    return {
        "podcast_id": podcast_id,
        "major_branches": [b.model_dump() for b in branches],
        "total": len(branches),
        "max_selectable": max_selectable_major(len(branches)),
    }


@router.get("/{podcast_id}/accusations")
def list_accusations(podcast_id: str):
    """Suspects for a podcast; correctness is only revealed by the accusation transition."""
    state = get_state()
    try:
        accusations = state.engine.list_accusations(podcast_id)
    except InvestigationError as e:
        raise to_http_exception(e)
    return {
        "podcast_id": podcast_id,
        "accusations": [a.model_dump(exclude={"is_correct"}) for a in accusations],
        "total": len(accusations),
    }


@branches_router.get("/{major_branch_id}/minor-branches")
def list_minor_branches(major_branch_id: str):
    state = get_state()
    try:
        branches = state.engine.list_minor_branches(major_branch_id)
    except InvestigationError as e:
        raise to_http_exception(e)
    return {
        "major_branch_id": major_branch_id,
        "minor_branches": [b.model_dump() for b in branches],
        "total": len(branches),
    }
