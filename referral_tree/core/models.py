"""Pydantic models for referral tree engine."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from referral_tree.types import TreeNodeDict


class RelationEntry(BaseModel):
    """One person in the referral network relative to the viewer.

    Parent links are expressed only through ``referrer_id``; the engine
    never stores back-references.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("id", "referral"),
        description="Referral record ID",
    )
    referrer_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("referrer_id", "referrerId", "referrer"),
        description="ID of the referring entry, None for direct referrals",
    )
    level: int | None = Field(
        default=None,
        ge=1,
        description="Depth reported by the data source (advisory)",
    )
    display_name: str = Field(
        default="",
        validation_alias=AliasChoices("display_name", "displayName", "username"),
    )
    email: str = ""
    qualifies: bool = Field(
        default=False,
        validation_alias=AliasChoices("qualifies", "hasQualifyingStake"),
        description="Whether the referral has a qualifying stake",
    )
    joined_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("joined_at", "joinedAt"),
    )

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        """Accept numeric IDs from the backend."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('referrer_id', mode='before')
    @classmethod
    def coerce_referrer_id(cls, v):
        """Normalize blank referrer to None."""
        if v is None:
            return None
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('display_name', 'email', mode='before')
    @classmethod
    def coerce_text(cls, v):
        """Convert missing text to empty string."""
        return "" if v is None else v


class TreeNode(BaseModel):
    """Node of a reconstructed referral tree.

    A tree exclusively owns its nodes; filtering allocates new ones.
    """

    model_config = ConfigDict(
        frozen=False,
        validate_assignment=True,
    )

    entry: RelationEntry
    children: list["TreeNode"] = Field(default_factory=list)

    @property
    def node_id(self) -> str:
        return self.entry.id

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def to_dict(self) -> TreeNodeDict:
        """Nested dict with IDs, names and status only."""
        return {
            "id": self.entry.id,
            "display_name": self.entry.display_name,
            "qualifies": self.entry.qualifies,
            "children": [child.to_dict() for child in self.children],
        }


class AuditReport(BaseModel):
    """Result of auditing one entry's downline.

    Counts derived from the flat relation are compared against counts
    read from the built tree.
    """

    model_config = ConfigDict(frozen=True)

    target_id: str
    found: bool = Field(..., description="Target exists in the entry list")
    in_tree: bool = Field(default=False, description="Target node located in the tree")
    direct_by_relation: int = Field(default=0, ge=0)
    direct_by_tree: int = Field(default=0, ge=0)
    total_by_relation: int = Field(default=0, ge=0)
    total_by_tree: int = Field(default=0, ge=0)
    mismatch: bool = False
    direct_list: list[RelationEntry] = Field(default_factory=list)

    @classmethod
    def not_found(cls, target_id: str) -> "AuditReport":
        return cls(target_id=target_id, found=False)


class TreeSummary(BaseModel):
    """Team metrics read off a built tree."""

    model_config = ConfigDict(frozen=True)

    total_direct: int = Field(default=0, ge=0, description="Root nodes (level 1)")
    active_direct: int = Field(default=0, ge=0, description="Qualifying root nodes")
    total_members: int = Field(default=0, ge=0, description="All nodes, every depth")
    active_members: int = Field(default=0, ge=0, description="Qualifying nodes, every depth")
    max_depth: int = Field(default=0, ge=0)
    members_by_depth: dict[int, int] = Field(default_factory=dict)
