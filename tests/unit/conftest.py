"""
Shared fixtures for unit tests.

This module provides common fixtures used across multiple test modules:
- Entry factory
- Well-formed sample network and its built tree
- Corrupted networks (cycle, duplicate row)
"""

import pytest

from referral_tree import RelationEntry, TreeBuilder


def make_entry(
    entry_id: str,
    referrer_id: str | None = None,
    level: int | None = 1,
    name: str | None = None,
    email: str | None = None,
    qualifies: bool = False,
) -> RelationEntry:
    """Create RelationEntry with readable defaults."""
    return RelationEntry(
        id=entry_id,
        referrer_id=referrer_id,
        level=level,
        display_name=name if name is not None else entry_id,
        email=email if email is not None else f"{entry_id}@example.com",
        qualifies=qualifies,
    )


@pytest.fixture
def entry_factory():
    """
    Entry factory.

    Returns:
        Callable creating RelationEntry objects
    """
    return make_entry


@pytest.fixture
def sample_entries() -> list[RelationEntry]:
    """
    Four-entry network.

    u1
    ├── u2
    │   └── u4
    └── u3
    """
    return [
        make_entry("u1", None, 1, name="Alice", qualifies=True),
        make_entry("u2", "u1", 2, name="Bob"),
        make_entry("u3", "u1", 2, name="Carol", qualifies=True),
        make_entry("u4", "u2", 3, name="Dave"),
    ]


@pytest.fixture
def wide_entries() -> list[RelationEntry]:
    """
    Two roots, five levels under the first one.

    r1 - a2 - a3 - a4 - a5 - a6
       \\ b2
    r2 - c2
    """
    return [
        make_entry("r1", None, 1, qualifies=True),
        make_entry("r2", None, 1),
        make_entry("a2", "r1", 2),
        make_entry("b2", "r1", 2, qualifies=True),
        make_entry("c2", "r2", 2),
        make_entry("a3", "a2", 3),
        make_entry("a4", "a3", 4, qualifies=True),
        make_entry("a5", "a4", 5),
        make_entry("a6", "a5", 6),
    ]


@pytest.fixture
def builder() -> TreeBuilder:
    """Tolerant builder with depth 5."""
    return TreeBuilder(max_depth=5, strict_levels=False)


@pytest.fixture
def sample_tree(builder, sample_entries):
    """Tree built from sample_entries."""
    return builder.build(sample_entries)
