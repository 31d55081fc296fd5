"""
Referral tree filtering.

Prunes a built tree down to the nodes matching a predicate plus every
ancestor on the path to a match.
"""

from collections.abc import Callable, Sequence
from enum import StrEnum

from loguru import logger

from referral_tree.core.models import RelationEntry, TreeNode


EntryPredicate = Callable[[RelationEntry], bool]


class StatusFilter(StrEnum):
    """Qualification status toggle of the team view."""

    ALL = "all"
    ACTIVE = "active"
    INACTIVE = "inactive"


def make_entry_predicate(
    search: str | None = None,
    status: StatusFilter | str = StatusFilter.ALL,
) -> EntryPredicate:
    """
    Build predicate from search box text and status toggle.

    Args:
        search: Case-insensitive substring of display name or email
        status: Qualification status to keep

    Returns:
        Predicate over RelationEntry

    Raises:
        ValueError: If status is not a StatusFilter value
    """
    status = StatusFilter(status)
    query = (search or "").strip().lower()

    def predicate(entry: RelationEntry) -> bool:
        matches_search = (
            not query
            or query in entry.display_name.lower()
            or query in entry.email.lower()
        )
        matches_status = (
            status == StatusFilter.ALL
            or (status == StatusFilter.ACTIVE and entry.qualifies)
            or (status == StatusFilter.INACTIVE and not entry.qualifies)
        )
        return matches_search and matches_status

    return predicate


class TreeFilter:
    """Ancestor-preserving filter over referral trees."""

    def filter(
        self,
        tree: Sequence[TreeNode],
        predicate: EntryPredicate,
    ) -> list[TreeNode]:
        """
        Derive pruned copy of a tree.

        A node is kept if it matches or any of its descendants does.
        Kept nodes carry only their kept children. The result never
        shares nodes with the input.

        Args:
            tree: Root nodes
            predicate: Match test over entries

        Returns:
            New root nodes, empty if nothing matches
        """
        result = []
        for root in tree:
            kept = self._prune(root, predicate)
            if kept is not None:
                result.append(kept)

        logger.debug(
            "Referral tree filtered",
            extra={"roots_in": len(tree), "roots_out": len(result)},
        )

        return result

    def _prune(
        self, node: TreeNode, predicate: EntryPredicate
    ) -> TreeNode | None:
        kept_children = []
        for child in node.children:
            kept = self._prune(child, predicate)
            if kept is not None:
                kept_children.append(kept)

        if kept_children or predicate(node.entry):
            return TreeNode(entry=node.entry, children=kept_children)
        return None


def filter_tree(
    tree: Sequence[TreeNode],
    predicate: EntryPredicate,
) -> list[TreeNode]:
    """Filter referral trees with a one-off TreeFilter."""
    return TreeFilter().filter(tree, predicate)
