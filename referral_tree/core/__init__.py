"""
Core tree engine functionality.

Содержит построение дерева, фильтрацию, аудит и модели данных.
"""

from referral_tree.core.auditor import DownlineAuditor, audit_downline
from referral_tree.core.builder import TreeBuilder, build_tree
from referral_tree.core.expansion import ExpansionState
from referral_tree.core.filter import (
    EntryPredicate,
    StatusFilter,
    TreeFilter,
    filter_tree,
    make_entry_predicate,
)
from referral_tree.core.models import AuditReport, RelationEntry, TreeNode, TreeSummary
from referral_tree.core.traversal import (
    count_descendants,
    find_node,
    flatten_tree,
    index_by_referrer,
    iter_with_depth,
    summarize_tree,
)

__all__ = [
    "TreeBuilder",
    "build_tree",
    "TreeFilter",
    "filter_tree",
    "make_entry_predicate",
    "EntryPredicate",
    "StatusFilter",
    "DownlineAuditor",
    "audit_downline",
    "ExpansionState",
    "RelationEntry",
    "TreeNode",
    "AuditReport",
    "TreeSummary",
    "count_descendants",
    "find_node",
    "flatten_tree",
    "index_by_referrer",
    "iter_with_depth",
    "summarize_tree",
]
