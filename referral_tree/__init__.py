"""
Referral Network Tree Engine.

Standalone package that rebuilds referral trees from flat referral lists,
filters them and audits them against the flat relation.

Example:
    >>> from referral_tree import RelationEntry, build_tree, audit_downline
    >>>
    >>> entries = [
    ...     RelationEntry(id="u1", level=1),
    ...     RelationEntry(id="u2", referrer_id="u1", level=2),
    ... ]
    >>> tree = build_tree(entries, max_depth=5)
    >>> [child.node_id for child in tree[0].children]
    ['u2']
    >>> audit_downline(entries, tree, "u1").mismatch
    False
"""

from referral_tree.config import TreeEngineSettings, settings
from referral_tree.constants import (
    DEFAULT_MAX_DEPTH,
    REFERRAL_COMMISSION_RATES,
    get_commission_rate,
)
from referral_tree.core import (
    AuditReport,
    DownlineAuditor,
    EntryPredicate,
    ExpansionState,
    RelationEntry,
    StatusFilter,
    TreeBuilder,
    TreeFilter,
    TreeNode,
    TreeSummary,
    audit_downline,
    build_tree,
    count_descendants,
    filter_tree,
    find_node,
    flatten_tree,
    iter_with_depth,
    make_entry_predicate,
    summarize_tree,
)
from referral_tree.exceptions import InvalidRelationEntryError, ReferralTreeError
from referral_tree.utils import (
    format_audit_report,
    format_summary,
    format_tree,
    parse_entries,
    setup_logging,
)


__version__ = "1.0.0"
__all__ = [
    # Core
    "TreeBuilder",
    "TreeFilter",
    "DownlineAuditor",
    "ExpansionState",
    "build_tree",
    "filter_tree",
    "audit_downline",
    "make_entry_predicate",
    "StatusFilter",
    "EntryPredicate",
    # Models
    "RelationEntry",
    "TreeNode",
    "AuditReport",
    "TreeSummary",
    # Traversal
    "count_descendants",
    "find_node",
    "flatten_tree",
    "iter_with_depth",
    "summarize_tree",
    # Configuration
    "TreeEngineSettings",
    "settings",
    "DEFAULT_MAX_DEPTH",
    "REFERRAL_COMMISSION_RATES",
    "get_commission_rate",
    # Errors
    "ReferralTreeError",
    "InvalidRelationEntryError",
    # Utils
    "parse_entries",
    "format_tree",
    "format_audit_report",
    "format_summary",
    "setup_logging",
]
