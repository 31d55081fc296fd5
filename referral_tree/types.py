"""
Type definitions for referral tree module.

TypedDict shapes of the raw API payload and of the dict exports
produced by the models.
"""

from typing import TypedDict, NotRequired


class RawTreeEntryDict(TypedDict):
    """
    One row of GET /referral/my-tree as sent by the backend.

    Attributes:
        level: Depth reported by the backend (1-5 bonuses, 6+ none)
        referrer: User ID of parent
        referral: User ID of referral
        username: Display name
        email: Email address
        hasQualifyingStake: Whether the referral has an active stake
        joinedAt: ISO date
    """
    level: int
    referrer: str | None
    referral: str
    username: str
    email: str
    hasQualifyingStake: bool
    joinedAt: NotRequired[str]


class TreeEnvelopeDict(TypedDict):
    """Response envelope around the flat tree."""
    tree: list[RawTreeEntryDict]
    maxLevels: NotRequired[int]
    note: NotRequired[str]


class TreeNodeDict(TypedDict):
    """Nested dict form of a TreeNode."""
    id: str
    display_name: str
    qualifies: bool
    children: list["TreeNodeDict"]
