"""
Tree traversal helpers.

Shared depth-first walks over built trees, plus the referrer index over
flat entries. Built trees are acyclic and bounded by max_depth, so plain
recursion is safe here.
"""

from collections import Counter, defaultdict
from collections.abc import Iterator, Sequence

from referral_tree.core.models import RelationEntry, TreeNode, TreeSummary


def iter_with_depth(
    tree: Sequence[TreeNode], start_depth: int = 1
) -> Iterator[tuple[TreeNode, int]]:
    """
    Walk nodes in pre-order together with their effective depth.

    Args:
        tree: Root nodes
        start_depth: Depth assigned to the roots

    Yields:
        (node, depth) pairs
    """
    for node in tree:
        yield node, start_depth
        yield from iter_with_depth(node.children, start_depth + 1)


def flatten_tree(tree: Sequence[TreeNode]) -> list[TreeNode]:
    """Return every node in pre-order."""
    return [node for node, _ in iter_with_depth(tree)]


def find_node(tree: Sequence[TreeNode], node_id: str) -> TreeNode | None:
    """
    Find first node with given entry ID (depth-first).

    Args:
        tree: Root nodes
        node_id: Entry ID to look up

    Returns:
        TreeNode or None if not found
    """
    for node in tree:
        if node.entry.id == node_id:
            return node
        found = find_node(node.children, node_id)
        if found is not None:
            return found
    return None


def count_descendants(node: TreeNode) -> int:
    """Count all nodes below given node."""
    return sum(1 + count_descendants(child) for child in node.children)


def summarize_tree(tree: Sequence[TreeNode]) -> TreeSummary:
    """
    Compute team metrics for a built tree.

    Args:
        tree: Root nodes

    Returns:
        TreeSummary with direct/team counts and per-depth breakdown
    """
    by_depth: Counter[int] = Counter()
    active_members = 0

    for node, depth in iter_with_depth(tree):
        by_depth[depth] += 1
        if node.entry.qualifies:
            active_members += 1

    return TreeSummary(
        total_direct=len(tree),
        active_direct=sum(1 for root in tree if root.entry.qualifies),
        total_members=sum(by_depth.values()),
        active_members=active_members,
        max_depth=max(by_depth, default=0),
        members_by_depth=dict(sorted(by_depth.items())),
    )


def index_by_referrer(
    entries: Sequence[RelationEntry],
) -> dict[str, list[RelationEntry]]:
    """
    Group entries by referrer ID, keeping input order.

    Entries without a referrer are not indexed.
    """
    index: dict[str, list[RelationEntry]] = defaultdict(list)
    for entry in entries:
        if entry.referrer_id is not None:
            index[entry.referrer_id].append(entry)
    return index
