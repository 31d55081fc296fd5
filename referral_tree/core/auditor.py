"""
Downline auditor.

Re-derives direct and total downline counts straight from the flat
referral list and compares them with the counts read off a built tree.
A divergence means a builder defect or corrupted input; it is reported
as data and never hidden.
"""

from collections.abc import Sequence

from loguru import logger

from referral_tree.core.models import AuditReport, RelationEntry, TreeNode
from referral_tree.core.traversal import (
    count_descendants,
    find_node,
    index_by_referrer,
)


class DownlineAuditor:
    """Audits built referral trees against the flat relation."""

    def audit(
        self,
        entries: Sequence[RelationEntry],
        tree: Sequence[TreeNode],
        target_id: str,
    ) -> AuditReport:
        """
        Audit downline of one entry.

        Args:
            entries: Flat referral list the tree was built from
            tree: Root nodes
            target_id: Entry ID to audit

        Returns:
            AuditReport, found=False with zero counts for unknown IDs
        """
        if not any(e.id == target_id for e in entries):
            logger.debug("Audit target not found", extra={"target_id": target_id})
            return AuditReport.not_found(target_id)

        return self._audit_indexed(
            index_by_referrer(entries), tree, target_id
        )

    def audit_all(
        self,
        entries: Sequence[RelationEntry],
        tree: Sequence[TreeNode],
    ) -> list[AuditReport]:
        """
        Audit every distinct entry ID.

        Args:
            entries: Flat referral list the tree was built from
            tree: Root nodes

        Returns:
            Reports in first-seen order of IDs
        """
        index = index_by_referrer(entries)
        seen: set[str] = set()
        reports = []
        for entry in entries:
            if entry.id in seen:
                continue
            seen.add(entry.id)
            reports.append(self._audit_indexed(index, tree, entry.id))
        return reports

    def find_mismatches(
        self,
        entries: Sequence[RelationEntry],
        tree: Sequence[TreeNode],
    ) -> list[AuditReport]:
        """Return only reports with mismatch=True."""
        return [r for r in self.audit_all(entries, tree) if r.mismatch]

    def _audit_indexed(
        self,
        index: dict[str, list[RelationEntry]],
        tree: Sequence[TreeNode],
        target_id: str,
    ) -> AuditReport:
        direct_list = list(index.get(target_id, ()))
        direct_by_relation = len(direct_list)
        total_by_relation = self.count_downline(index, target_id)

        node = find_node(tree, target_id)
        if node is not None:
            direct_by_tree = len(node.children)
            total_by_tree = count_descendants(node)
        else:
            direct_by_tree = 0
            total_by_tree = 0

        mismatch = (
            direct_by_relation != direct_by_tree
            or total_by_relation != total_by_tree
        )

        report = AuditReport(
            target_id=target_id,
            found=True,
            in_tree=node is not None,
            direct_by_relation=direct_by_relation,
            direct_by_tree=direct_by_tree,
            total_by_relation=total_by_relation,
            total_by_tree=total_by_tree,
            mismatch=mismatch,
            direct_list=direct_list,
        )

        if mismatch:
            logger.warning(
                "Downline mismatch detected",
                extra={
                    "target_id": target_id,
                    "in_tree": report.in_tree,
                    "direct_by_relation": direct_by_relation,
                    "direct_by_tree": direct_by_tree,
                    "total_by_relation": total_by_relation,
                    "total_by_tree": total_by_tree,
                },
            )

        return report

    @staticmethod
    def count_downline(
        index: dict[str, list[RelationEntry]], target_id: str
    ) -> int:
        """
        Count distinct IDs reachable from target through referrer links.

        The visited set is global to the walk: an ID reached through
        several paths, or through a cycle, is counted once.

        Args:
            index: Referrer ID -> entries referred by it
            target_id: Entry ID to start from

        Returns:
            Number of downline members excluding the target
        """
        visited = {target_id}
        stack = [target_id]
        total = 0
        while stack:
            current = stack.pop()
            for child in index.get(current, ()):
                if child.id in visited:
                    continue
                visited.add(child.id)
                total += 1
                stack.append(child.id)
        return total


def audit_downline(
    entries: Sequence[RelationEntry],
    tree: Sequence[TreeNode],
    target_id: str,
) -> AuditReport:
    """Audit one entry with a one-off DownlineAuditor."""
    return DownlineAuditor().audit(entries, tree, target_id)
