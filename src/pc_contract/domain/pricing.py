"""Single-sided AMM pricing.

Probability is the YES pool's share of the total pool. A purchase of
``amount`` coins on one side buys ``amount / price`` shares at the side's
current probability and credits only that side's pool; the opposite pool
is left untouched. Unlike a constant-product (x*y=k) maker, total liquidity
therefore grows with every trade.

All functions are pure and operate on explicit pool values.
"""

from src.pc_common.enums import Side
from src.pc_common.errors import BetValidationError, DegenerateMarketError
from src.pc_contract.domain.models import MarketState, Quote


def probability(yes_pool: float, no_pool: float) -> float:
    """Implied YES probability; 0.5 for an empty market."""
    total = yes_pool + no_pool
    if total == 0:
        return 0.5
    return yes_pool / total


def initial_pools(liquidity: float) -> tuple[float, float]:
    """Split initial liquidity evenly: 1000 -> (500, 500)."""
    if liquidity < 0:
        raise ValueError(f"liquidity must be >= 0, got {liquidity}")
    half = liquidity / 2
    return half, half


def quote(amount: float, yes_pool: float, no_pool: float, side: str) -> Quote:
    """Price ``amount`` coins on ``side`` against the given pools.

    Raises:
        BetValidationError: non-positive amount, negative pool or unknown side.
        DegenerateMarketError: the purchased side has a price of exactly 0
            (the market is fully one-sided against it).
    """
    if amount <= 0:
        raise BetValidationError(f"amount must be positive, got {amount}")
    if yes_pool < 0 or no_pool < 0:
        raise BetValidationError(f"pools must be non-negative ({yes_pool}, {no_pool})")

    p = probability(yes_pool, no_pool)
    if side == Side.YES:
        price = p
        new_yes_pool, new_no_pool = yes_pool + amount, no_pool
    elif side == Side.NO:
        price = 1 - p
        new_yes_pool, new_no_pool = yes_pool, no_pool + amount
    else:
        raise BetValidationError(f'side must be "yes" or "no", got {side!r}')

    if price <= 0:
        raise DegenerateMarketError(Side(side).value, p)

    return Quote(
        side=Side(side).value,
        amount=amount,
        shares=amount / price,
        price=price,
        new_yes_pool=new_yes_pool,
        new_no_pool=new_no_pool,
        new_probability=probability(new_yes_pool, new_no_pool),
    )


def market_state(yes_pool: float, no_pool: float) -> MarketState:
    p = probability(yes_pool, no_pool)
    return MarketState(
        yes_pool=yes_pool,
        no_pool=no_pool,
        total_pool=yes_pool + no_pool,
        probability=p,
        yes_price=p,
        no_price=1 - p,
    )
