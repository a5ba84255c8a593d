"""Payout formulas.

Two deliberately distinct functions:

* ``potential_payout`` is an advisory estimate shown at bet time. It
  assumes the winning side shares the whole pool pro rata.
* ``actual_payout`` is what resolution credits: 1 coin per winning share,
  independent of the pool size.
"""

from src.pc_common.enums import Side


def potential_payout(shares: float, yes_pool: float, no_pool: float, side: str) -> float:
    total = yes_pool + no_pool
    if total == 0:
        return 0.0
    side_pool = yes_pool if side == Side.YES else no_pool
    return shares * total / (side_pool + shares)


def actual_payout(
    shares: float, total_pool_at_resolution: float, side: str, resolution: str
) -> float:
    # Winning shares redeem 1:1; the pool size does not scale the payout.
    if side != resolution:
        return 0.0
    return shares
