"""
Expansion state of the rendered tree.

Explicit set of expanded node IDs handed to the renderer, so it can be
reset and tested without any UI.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from referral_tree.constants import ROOT_LEVEL
from referral_tree.core.models import TreeNode
from referral_tree.core.traversal import flatten_tree


@dataclass
class ExpansionState:
    """Tracks which nodes are expanded."""

    expanded: set[str] = field(default_factory=set)

    @property
    def expanded_ids(self) -> frozenset[str]:
        return frozenset(self.expanded)

    def is_expanded(self, node_id: str) -> bool:
        return node_id in self.expanded

    def toggle(self, node_id: str) -> bool:
        """
        Flip expansion of a node.

        Returns:
            True if the node is expanded afterwards
        """
        if node_id in self.expanded:
            self.expanded.discard(node_id)
            return False
        self.expanded.add(node_id)
        return True

    def expand_all(self, node_ids: Iterable[str]) -> None:
        """Replace state with given IDs expanded."""
        self.expanded = set(node_ids)

    def expand_tree(self, tree: Sequence[TreeNode]) -> None:
        """Expand every node of the tree that has children."""
        self.expand_all(node.node_id for node in flatten_tree(tree) if node.has_children)

    def collapse_all(self) -> None:
        self.expanded = set()

    def is_visible(self, depth: int, parent_id: str | None) -> bool:
        """
        Check whether renderer should show a node.

        Top-level nodes are always shown; deeper nodes only under an
        expanded parent.
        """
        if depth <= ROOT_LEVEL:
            return True
        return parent_id is not None and parent_id in self.expanded

    def __len__(self) -> int:
        return len(self.expanded)
