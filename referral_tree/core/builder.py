"""
Referral tree builder.

Reconstructs rooted trees from the flat referral list returned by the
backend. Each entry only knows its own ID and its referrer's ID.
"""

from collections.abc import Sequence

from loguru import logger

from referral_tree.config import settings
from referral_tree.constants import ROOT_LEVEL
from referral_tree.core.models import RelationEntry, TreeNode
from referral_tree.core.traversal import index_by_referrer


class TreeBuilder:
    """
    Builds referral trees with a depth bound and cycle protection.

    Malformed input (dangling referrers, cycles, out-of-range levels)
    never fails the build: the offending branch is left out.
    """

    def __init__(
        self,
        max_depth: int | None = None,
        strict_levels: bool | None = None,
    ) -> None:
        """
        Initialize builder.

        Args:
            max_depth: Default depth bound, settings.max_depth when omitted
            strict_levels: Require child level == parent depth + 1,
                settings.strict_levels when omitted
        """
        self.max_depth = max_depth if max_depth is not None else settings.max_depth
        self.strict_levels = (
            strict_levels if strict_levels is not None else settings.strict_levels
        )

    def build(
        self,
        entries: Sequence[RelationEntry],
        max_depth: int | None = None,
    ) -> list[TreeNode]:
        """
        Build one tree per root entry.

        Args:
            entries: Flat referral list (not modified)
            max_depth: Depth bound for this call, overrides the default

        Returns:
            Root nodes in input order

        Raises:
            ValueError: If max_depth < 1
        """
        depth_limit = max_depth if max_depth is not None else self.max_depth
        if depth_limit < ROOT_LEVEL:
            raise ValueError(f"max_depth must be >= {ROOT_LEVEL}, got {depth_limit}")

        if not entries:
            return []

        children_index = index_by_referrer(entries)
        roots = self.find_roots(entries)

        trees = []
        for root in roots:
            children = self._attach_children(
                root,
                depth=ROOT_LEVEL,
                path=frozenset({root.id}),
                children_index=children_index,
                depth_limit=depth_limit,
            )
            trees.append(TreeNode(entry=root, children=children))

        logger.debug(
            "Referral tree built",
            extra={
                "entries": len(entries),
                "roots": len(trees),
                "max_depth": depth_limit,
                "strict_levels": self.strict_levels,
            },
        )

        return trees

    @staticmethod
    def find_roots(entries: Sequence[RelationEntry]) -> list[RelationEntry]:
        """
        Detect root entries.

        Entries reporting level 1 are roots. If none does, fall back to
        entries whose referrer is missing or not in the list.

        Args:
            entries: Flat referral list

        Returns:
            Root entries in input order
        """
        roots = [e for e in entries if e.level == ROOT_LEVEL]
        if roots:
            return roots

        known_ids = {e.id for e in entries}
        roots = [
            e for e in entries
            if e.referrer_id is None or e.referrer_id not in known_ids
        ]

        logger.debug(
            "No level 1 entries, roots detected by referrer",
            extra={"roots": len(roots)},
        )

        return roots

    def _attach_children(
        self,
        parent: RelationEntry,
        depth: int,
        path: frozenset[str],
        children_index: dict[str, list[RelationEntry]],
        depth_limit: int,
    ) -> list[TreeNode]:
        """
        Build child nodes of ``parent`` sitting at effective ``depth``.

        ``path`` holds the IDs from the root down to ``parent``.
        """
        if depth >= depth_limit:
            return []

        children = []
        for entry in children_index.get(parent.id, ()):
            if entry.id in path:
                logger.warning(
                    "Referral cycle detected, edge skipped",
                    extra={"referrer_id": parent.id, "referral_id": entry.id},
                )
                continue

            if entry.level is not None and entry.level > depth_limit:
                logger.debug(
                    "Entry level beyond max depth, branch omitted",
                    extra={"referral_id": entry.id, "level": entry.level},
                )
                continue

            if self.strict_levels and entry.level != depth + 1:
                logger.debug(
                    "Entry level inconsistent with position, branch omitted",
                    extra={
                        "referral_id": entry.id,
                        "level": entry.level,
                        "expected_level": depth + 1,
                    },
                )
                continue

            # Reported level may only shorten the remaining depth
            next_depth = max(entry.level or 0, depth + 1)

            grandchildren = self._attach_children(
                entry,
                depth=next_depth,
                path=path | {entry.id},
                children_index=children_index,
                depth_limit=depth_limit,
            )
            children.append(TreeNode(entry=entry, children=grandchildren))

        return children


def build_tree(
    entries: Sequence[RelationEntry],
    max_depth: int | None = None,
    strict_levels: bool | None = None,
) -> list[TreeNode]:
    """Build referral trees with a one-off TreeBuilder."""
    return TreeBuilder(strict_levels=strict_levels).build(entries, max_depth)
