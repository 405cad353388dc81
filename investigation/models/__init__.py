"""Typed records for narrative content and session progress."""

from .content import Accusation, MajorBranch, MinorBranch, Podcast
from .session import InvestigationSession

__all__ = [
    "Accusation",
    "MajorBranch",
    "MinorBranch",
    "Podcast",
    "InvestigationSession",
]
