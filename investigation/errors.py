"""
Engine error taxonomy.

Every error is a rejection of the attempted operation; the session is left
exactly as it was. `kind` is the stable name surfaced to callers.
"""

from typing import Iterable, Optional


class InvestigationError(Exception):
    """Base class for all engine rejections."""

    kind = "InvestigationError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class NotFound(InvestigationError):
    """Referenced session, podcast, branch or accusation does not exist."""

    kind = "NotFound"

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class OwnershipMismatch(InvestigationError):
    """Referenced entity belongs to a different parent than expected."""

    kind = "OwnershipMismatch"


class InvalidState(InvestigationError):
    """The session is not in a state the operation accepts."""

    kind = "InvalidState"

    def __init__(self, operation: str, current: str, expected: Optional[Iterable[str]] = None):
        expected_list = sorted(expected or [])
        super().__init__(
            f"{operation} not allowed in state {current}"
            + (f" (requires {', '.join(expected_list)})" if expected_list else "")
        )
        self.operation = operation
        self.current = current
        self.expected = expected_list


class QuotaExceeded(InvestigationError):
    """Selection would exceed a quota, or a quota is not yet met."""

    kind = "QuotaExceeded"


class DuplicateSelection(InvestigationError):
    """Same branch id selected twice within the same scope."""

    kind = "DuplicateSelection"


class StaleRevision(InvestigationError):
    """The session moved on since the revision the caller acted on."""

    kind = "StaleRevision"

    def __init__(self, operation: str, current: int, expected: int):
        super().__init__(f"{operation} expected revision {expected}, session is at {current}")
        self.operation = operation
        self.current = current
        self.expected = expected
