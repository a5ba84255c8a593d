"""ResolutionService — close a contract and settle every bet on it.

Order of work:
  1. close the contract under the BettingEngine's per-contract lock and
     COMMIT, so no bet can be accepted once payouts begin
  2. settle each bet (own SAVEPOINT, failures collected)
  3. feed each settled bet into its owner's ranking (own SAVEPOINT,
     failures collected), in bet creation order, then COMMIT
  4. recompute global/tier ranks once for the whole resolution
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_account.domain.repository import UserRepositoryProtocol
from src.pc_account.infrastructure.persistence import UserRepository
from src.pc_betting.application.service import get_betting_engine
from src.pc_betting.domain.repository import BetRepositoryProtocol
from src.pc_betting.engine.engine import BettingEngine
from src.pc_betting.infrastructure.persistence import BetRepository
from src.pc_common.datetime_utils import to_iso, utc_now
from src.pc_common.enums import Side
from src.pc_common.errors import BetValidationError
from src.pc_ranking.application.service import RankingApplicationService
from src.pc_ranking.domain.models import BetOutcome
from src.pc_settlement.application.schemas import ResolutionResponse
from src.pc_settlement.domain.settlement import settle_bets

logger = logging.getLogger(__name__)


class ResolutionService:
    def __init__(
        self,
        engine: BettingEngine | None = None,
        bet_repo: BetRepositoryProtocol | None = None,
        user_repo: UserRepositoryProtocol | None = None,
        ranking: RankingApplicationService | None = None,
    ) -> None:
        self._engine = engine
        self._bets: BetRepositoryProtocol = bet_repo or BetRepository()
        self._users: UserRepositoryProtocol = user_repo or UserRepository()
        self._ranking = ranking or RankingApplicationService()

    @property
    def engine(self) -> BettingEngine:
        return self._engine or get_betting_engine()

    async def resolve(
        self, db: AsyncSession, contract_id: str, resolution: str
    ) -> ResolutionResponse:
        if resolution not in (Side.YES, Side.NO):
            raise BetValidationError(f'resolution must be "yes" or "no", got {resolution!r}')
        resolution = Side(resolution).value

        # Step 1: irreversible close, committed before any payout
        try:
            contract = await self.engine.close_contract(db, contract_id, resolution)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Contract %s closed as %s", contract_id, contract.resolution)

        # Step 2: payouts
        bets = await self._bets.list_bets_for_contract(db, contract_id)
        report = await settle_bets(
            db,
            bets,
            resolution=resolution,
            total_pool=contract.yes_pool + contract.no_pool,
            bet_repo=self._bets,
            user_repo=self._users,
            settled_at=contract.resolved_at or utc_now(),
        )

        # Step 3: rankings
        failed = list(report.failed_bet_ids)
        for s in report.settled:
            outcome = BetOutcome.from_settled_bet(
                s.bet.user_id, s.bet.amount, s.bet.purchase_price, s.payout
            )
            try:
                async with db.begin_nested():
                    await self._ranking.apply_outcome(db, outcome)
            except Exception:
                logger.exception("Ranking update failed: bet=%s user=%s", s.bet.id, s.bet.user_id)
                failed.append(s.bet.id)

        try:
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        # Step 4: one full resort for the whole resolution. Everything above
        # is committed; a failed resort is re-run by the next resolution.
        ranks_recomputed = True
        try:
            await self._ranking.recompute_ranks(db)
        except Exception:
            logger.exception("Rank recompute failed after resolving contract %s", contract_id)
            ranks_recomputed = False

        logger.info(
            "Contract %s resolved: %d bets, %d winning, %.4f paid, %d failed",
            contract_id,
            len(bets),
            report.winning_bets,
            report.total_payouts,
            len(failed),
        )
        return ResolutionResponse(
            contract_id=contract_id,
            resolution=resolution,
            resolved_at=to_iso(contract.resolved_at),
            total_payouts=report.total_payouts,
            bet_count=len(bets),
            winning_bets=report.winning_bets,
            failed_bet_ids=failed,
            ranks_recomputed=ranks_recomputed,
        )
