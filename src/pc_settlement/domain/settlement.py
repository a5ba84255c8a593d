"""Per-bet settlement of a closed contract.

Each bet is paid in its own SAVEPOINT: write payout_amount + settled_at
(only if the bet has not been settled before), then credit the owner when
the payout is positive. A failing bet is rolled back on its own, logged and
reported; the remaining bets are still processed.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_account.domain.repository import UserRepositoryProtocol
from src.pc_betting.domain.models import Bet
from src.pc_betting.domain.repository import BetRepositoryProtocol
from src.pc_common.errors import InternalError
from src.pc_settlement.domain.payout import actual_payout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SettledBet:
    bet: Bet
    payout: float


@dataclass
class SettlementReport:
    settled: list[SettledBet] = field(default_factory=list)
    skipped_bet_ids: list[str] = field(default_factory=list)   # already settled
    failed_bet_ids: list[str] = field(default_factory=list)

    @property
    def total_payouts(self) -> float:
        return sum(s.payout for s in self.settled)

    @property
    def winning_bets(self) -> int:
        return sum(1 for s in self.settled if s.payout > 0)


async def settle_bets(
    db: AsyncSession,
    bets: list[Bet],
    resolution: str,
    total_pool: float,
    bet_repo: BetRepositoryProtocol,
    user_repo: UserRepositoryProtocol,
    settled_at: datetime,
) -> SettlementReport:
    report = SettlementReport()
    for bet in bets:
        payout = actual_payout(bet.shares, total_pool, bet.position, resolution)
        try:
            async with db.begin_nested():
                newly_settled = await bet_repo.set_payout(db, bet.id, payout, settled_at)
                if newly_settled and payout > 0:
                    credited = await user_repo.credit_prediction_coins(db, bet.user_id, payout)
                    if credited is None:
                        # contract_bets.user_id references users; a miss is corruption
                        raise InternalError(
                            f"Bet owner {bet.user_id} not found while crediting bet {bet.id}"
                        )
        except Exception:
            logger.exception("Settlement failed: bet=%s user=%s", bet.id, bet.user_id)
            report.failed_bet_ids.append(bet.id)
            continue

        if not newly_settled:
            logger.warning("Bet %s already settled; skipped", bet.id)
            report.skipped_bet_ids.append(bet.id)
            continue
        report.settled.append(SettledBet(bet=bet, payout=payout))
    return report
