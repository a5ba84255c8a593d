"""Bet input validation, run before any lock is taken or row is read."""

from config.settings import settings
from src.pc_common.enums import Side
from src.pc_common.errors import BetValidationError


def validate_bet(side: str, amount: int) -> None:
    if side not in (Side.YES, Side.NO):
        raise BetValidationError(f'side must be "yes" or "no", got {side!r}')
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise BetValidationError(f"amount must be a whole number of coins, got {amount!r}")
    if not settings.MIN_BET_AMOUNT <= amount <= settings.MAX_BET_AMOUNT:
        raise BetValidationError(
            f"amount must be between {settings.MIN_BET_AMOUNT} and "
            f"{settings.MAX_BET_AMOUNT}, got {amount}"
        )
