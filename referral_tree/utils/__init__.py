"""
Utility functions for referral tree engine.

Вспомогательные функции: разбор входных данных, форматирование, логирование.
"""

from referral_tree.utils.formatters import (
    format_audit_report,
    format_entry_label,
    format_rate,
    format_referral_count,
    format_referral_count_ru,
    format_summary,
    format_tree,
)
from referral_tree.utils.ingestion import coerce_entry, extract_rows, parse_entries
from referral_tree.utils.logging import setup_logging

__all__ = [
    "coerce_entry",
    "extract_rows",
    "parse_entries",
    "format_audit_report",
    "format_entry_label",
    "format_rate",
    "format_referral_count",
    "format_referral_count_ru",
    "format_summary",
    "format_tree",
    "setup_logging",
]
