"""
Exception types for the referral tree engine.

Malformed relation data is never an exception inside the engine; these
types only cover the ingestion boundary and caller contract violations.
"""

from typing import Any


class ReferralTreeError(Exception):
    """Base error for the referral tree engine."""
    pass


class InvalidRelationEntryError(ReferralTreeError, ValueError):
    """Raised when a raw payload row cannot be coerced into a RelationEntry."""

    def __init__(
        self, index: int | None, errors: list[dict[str, Any]] | None = None
    ) -> None:
        self.index = index
        self.errors = errors or []
        fields = ", ".join(
            ".".join(str(part) for part in err.get("loc", ())) or "<row>"
            for err in self.errors
        )
        where = f"row {index}" if index is not None else "entry"
        super().__init__(f"Invalid relation {where}: {fields or 'unknown error'}")
