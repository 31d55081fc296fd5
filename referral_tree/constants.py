"""
Default constants for the referral tree engine.

Contains depth defaults and the per-level commission lookup table
shown next to each node in diagnostics output.
"""

from decimal import Decimal

# Depth of a direct referral of the tree owner
ROOT_LEVEL = 1

# Levels returned by GET /referral/my-tree by default
DEFAULT_MAX_DEPTH = 5

# Upper bound accepted from configuration
MAX_ALLOWED_DEPTH = 50

# Commission percent by depth (levels 6+ earn no bonus)
REFERRAL_COMMISSION_RATES: dict[int, Decimal] = {
    1: Decimal("5"),
    2: Decimal("2"),
    3: Decimal("1.5"),
    4: Decimal("1"),
    5: Decimal("0.5"),
}


def get_commission_rate(depth: int) -> Decimal:
    """
    Get commission percent for a depth in the tree.

    Args:
        depth: Effective depth (1 = direct referral)

    Returns:
        Commission percent, Decimal("0") outside the table

    Example:
        >>> get_commission_rate(3)
        Decimal('1.5')
        >>> get_commission_rate(6)
        Decimal('0')
    """
    return REFERRAL_COMMISSION_RATES.get(depth, Decimal("0"))
