"""Per-user bet history figures, derived from bets and their contracts.

A bet is pending while its contract is open, a win when the contract
resolved to the bet's position, and a loss otherwise.
"""

from src.pc_betting.domain.models import BetView, UserStatistics
from src.pc_common.enums import BetOutcomeStatus, ContractStatus


def bet_outcome(view: BetView) -> BetOutcomeStatus:
    if view.contract_status != ContractStatus.CLOSED or view.contract_resolution is None:
        return BetOutcomeStatus.PENDING
    if view.bet.position == view.contract_resolution:
        return BetOutcomeStatus.WIN
    return BetOutcomeStatus.LOSS


def profit_loss(view: BetView) -> float:
    outcome = bet_outcome(view)
    if outcome == BetOutcomeStatus.WIN:
        return view.bet.payout_amount - view.bet.amount
    if outcome == BetOutcomeStatus.LOSS:
        return -view.bet.amount
    return 0.0


def summarize(views: list[BetView]) -> UserStatistics:
    wins = losses = pending = 0
    volume = payouts = profit = 0.0
    for v in views:
        outcome = bet_outcome(v)
        if outcome == BetOutcomeStatus.WIN:
            wins += 1
        elif outcome == BetOutcomeStatus.LOSS:
            losses += 1
        else:
            pending += 1
        volume += v.bet.amount
        payouts += v.bet.payout_amount
        profit += profit_loss(v)

    resolved = wins + losses
    return UserStatistics(
        total_bets=len(views),
        resolved_bets=resolved,
        winning_bets=wins,
        losing_bets=losses,
        pending_bets=pending,
        total_volume=volume,
        total_payouts=payouts,
        total_profit=profit,
        win_rate=wins / resolved if resolved else 0.0,
    )
