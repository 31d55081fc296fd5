"""
Audit referral tree dump.

Loads a JSON dump of GET /referral/my-tree, rebuilds the tree, prints it
with the team summary and audits downline counts.

Usage:
    python scripts/audit_referral_tree.py --input tree.json
    python scripts/audit_referral_tree.py --input tree.json --target u1 --max-depth 3
    python scripts/audit_referral_tree.py --input tree.json --search alice --status active

Exit codes:
    0 - no mismatches
    1 - downline mismatch found
    2 - input file unreadable
"""

import argparse
import json
import sys
from pathlib import Path


# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger  # noqa: E402

from referral_tree import (  # noqa: E402
    DownlineAuditor,
    ExpansionState,
    InvalidRelationEntryError,
    StatusFilter,
    TreeBuilder,
    TreeFilter,
    format_audit_report,
    format_summary,
    format_tree,
    make_entry_predicate,
    parse_entries,
    setup_logging,
    summarize_tree,
)


EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_BAD_INPUT = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rebuild and audit referral tree dump")
    parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Path to JSON dump (row list or API envelope)",
    )
    parser.add_argument(
        "--target",
        action="append",
        default=[],
        help="Entry ID to audit (repeatable, default: every entry)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Deepest level to attach (default: REFERRAL_TREE_MAX_DEPTH or 5)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Only attach children whose level is parent depth + 1",
    )
    parser.add_argument("--search", default=None, help="Filter by name or email")
    parser.add_argument(
        "--status",
        choices=[s.value for s in StatusFilter],
        default=StatusFilter.ALL.value,
        help="Filter by qualification status",
    )
    parser.add_argument(
        "--collapsed",
        action="store_true",
        help="Print only top-level referrals",
    )
    parser.add_argument("--log-level", default=None, help="Loguru level")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        payload = json.loads(args.input.read_text(encoding="utf-8"))
        entries = parse_entries(payload)
    except (OSError, json.JSONDecodeError, InvalidRelationEntryError) as e:
        logger.error(f"Cannot read referral dump {args.input}: {e}")
        return EXIT_BAD_INPUT

    if args.max_depth is not None and args.max_depth < 1:
        logger.error(f"--max-depth must be >= 1, got {args.max_depth}")
        return EXIT_BAD_INPUT

    builder = TreeBuilder(strict_levels=args.strict or None)
    tree = builder.build(entries, args.max_depth)

    shown = tree
    if args.search or args.status != StatusFilter.ALL:
        predicate = make_entry_predicate(args.search, args.status)
        shown = TreeFilter().filter(tree, predicate)

    expansion = ExpansionState()
    if not args.collapsed:
        expansion.expand_tree(shown)

    print(format_tree(shown, expansion, show_rates=True) or "No referrals match your filters")
    print()
    print(format_summary(summarize_tree(tree)))

    auditor = DownlineAuditor()
    if args.target:
        reports = [auditor.audit(entries, tree, target) for target in args.target]
    else:
        reports = auditor.audit_all(entries, tree)

    mismatches = [r for r in reports if r.mismatch]
    for report in reports:
        if args.target or report.mismatch:
            print()
            print(format_audit_report(report))

    logger.info(
        f"Audited {len(reports)} entries, {len(mismatches)} mismatches"
    )

    return EXIT_MISMATCH if mismatches else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
