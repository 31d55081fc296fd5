"""
Text formatting for referral trees and audit reports.

Функции для вывода дерева, отчетов аудита и сводки команды
в читаемом виде (консоль, панель диагностики).
"""

from collections.abc import Sequence
from decimal import Decimal

from referral_tree.constants import ROOT_LEVEL, get_commission_rate
from referral_tree.core.expansion import ExpansionState
from referral_tree.core.models import AuditReport, RelationEntry, TreeNode, TreeSummary


BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


def format_rate(rate: Decimal) -> str:
    """
    Форматировать процент комиссии без лишних нулей.

    Example:
        >>> format_rate(Decimal("1.50"))
        '1.5%'
    """
    return f"{rate.normalize():f}%"


def format_referral_count(count: int) -> str:
    """
    Format referral count with plural.

    Example:
        >>> format_referral_count(1)
        '1 referral'
    """
    return "1 referral" if count == 1 else f"{count} referrals"


def format_referral_count_ru(count: int) -> str:
    """
    Форматировать количество рефералов по-русски.

    Example:
        >>> format_referral_count_ru(3)
        '3 реферала'
    """
    if count % 10 == 1 and count % 100 != 11:
        return f"{count} реферал"
    if count % 10 in (2, 3, 4) and count % 100 not in (12, 13, 14):
        return f"{count} реферала"
    return f"{count} рефералов"


def format_entry_label(entry: RelationEntry) -> str:
    """
    Форматировать подпись узла.

    Args:
        entry: Запись реферала

    Returns:
        Строка вида "alice <alice@mail.com> [Active]"
    """
    name = entry.display_name or entry.id
    status = "Active" if entry.qualifies else "Inactive"
    if entry.email:
        return f"{name} <{entry.email}> [{status}]"
    return f"{name} [{status}]"


def format_tree(
    tree: Sequence[TreeNode],
    expansion: ExpansionState | None = None,
    show_rates: bool = False,
) -> str:
    """
    Render tree with box-drawing connectors.

    Args:
        tree: Root nodes
        expansion: Expansion state; every node is expanded when omitted
        show_rates: Append commission percent of each depth

    Returns:
        Multi-line string, one node per line
    """
    lines: list[str] = []

    def render(nodes: Sequence[TreeNode], prefix: str, depth: int) -> None:
        for i, node in enumerate(nodes):
            is_last = i == len(nodes) - 1
            if depth == ROOT_LEVEL:
                connector, child_prefix = "", ""
            else:
                connector = LAST_BRANCH if is_last else BRANCH
                child_prefix = prefix + (SPACE if is_last else PIPE)

            label = format_entry_label(node.entry)
            if show_rates:
                label += f" ({format_rate(get_commission_rate(depth))})"

            children_visible = expansion is None or expansion.is_visible(
                depth + 1, node.node_id
            )
            if node.has_children and not children_visible:
                label += f" [+{format_referral_count(len(node.children))}]"

            lines.append(prefix + connector + label)

            if children_visible:
                render(node.children, child_prefix, depth + 1)

    render(tree, "", ROOT_LEVEL)
    return "\n".join(lines)


def format_audit_report(report: AuditReport) -> str:
    """
    Format audit report for diagnostics panel.

    Args:
        report: AuditReport object

    Returns:
        Multi-line formatted report
    """
    lines = [f"Audit: {report.target_id}"]

    if not report.found:
        lines.append("  Target not found")
        return "\n".join(lines)

    lines.extend([
        f"  Direct (relation/tree): {report.direct_by_relation} / {report.direct_by_tree}",
        f"  Total (relation/tree):  {report.total_by_relation} / {report.total_by_tree}",
    ])
    if not report.in_tree:
        lines.append("  Node missing from tree")
    if report.direct_list:
        direct_ids = ", ".join(entry.id for entry in report.direct_list)
        lines.append(f"  Direct referrals: {direct_ids}")
    lines.append(f"  Status: {'MISMATCH' if report.mismatch else 'OK'}")
    return "\n".join(lines)


def format_summary(summary: TreeSummary) -> str:
    """
    Format team summary to text report.

    Args:
        summary: TreeSummary object

    Returns:
        Multi-line formatted report
    """
    lines = [
        "Team:",
        f"  Direct referrals: {summary.total_direct} ({summary.active_direct} active)",
        f"  Team members:     {summary.total_members} ({summary.active_members} active)",
        f"  Depth:            {summary.max_depth}",
    ]
    for depth, count in summary.members_by_depth.items():
        lines.append(f"    Level {depth}: {format_referral_count(count)}")
    return "\n".join(lines)
