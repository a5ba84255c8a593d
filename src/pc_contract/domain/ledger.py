"""ContractLedger — the state machine of one binary contract.

open ──close(resolution)──▶ closed   (one transition, never reversed)

While open the ledger accepts quotes and applies them to its pools; every
applied quote yields the PriceHistoryPoint to append. Once closed the
resolution is fixed and the pools are frozen.

The ledger mutates the Contract it wraps in memory; the caller persists
the result inside the same transaction that loaded the row FOR UPDATE.
"""

from datetime import datetime

from src.pc_common.datetime_utils import utc_now
from src.pc_common.enums import ContractStatus, Side
from src.pc_common.errors import (
    BetValidationError,
    ContractAlreadyResolvedError,
    ContractNotOpenError,
)
from src.pc_common.id_generator import generate_id
from src.pc_contract.domain import pricing
from src.pc_contract.domain.models import Contract, MarketState, PriceHistoryPoint, Quote


class ContractLedger:
    def __init__(self, contract: Contract) -> None:
        self.contract = contract

    @classmethod
    def open_new(
        cls,
        title: str,
        description: str | None,
        category: str,
        creator_id: str | None,
        closing_date: datetime | None,
        liquidity: float,
    ) -> tuple["ContractLedger", PriceHistoryPoint]:
        """Build a fresh open contract and its first history point."""
        yes_pool, no_pool = pricing.initial_pools(liquidity)
        now = utc_now()
        contract = Contract(
            id=generate_id(),
            title=title,
            description=description,
            category=category,
            creator_id=creator_id,
            status=ContractStatus.OPEN.value,
            resolution=None,
            yes_pool=yes_pool,
            no_pool=no_pool,
            liquidity_pool=yes_pool + no_pool,
            current_yes_probability=pricing.probability(yes_pool, no_pool),
            closing_date=closing_date,
            resolved_at=None,
            created_at=now,
            updated_at=now,
        )
        ledger = cls(contract)
        return ledger, ledger._snapshot(now)

    @property
    def is_open(self) -> bool:
        return self.contract.status == ContractStatus.OPEN

    def ensure_open(self) -> None:
        if not self.is_open:
            raise ContractNotOpenError(self.contract.id)

    def quote(self, amount: float, side: str) -> Quote:
        self.ensure_open()
        return pricing.quote(amount, self.contract.yes_pool, self.contract.no_pool, side)

    def apply(self, q: Quote) -> PriceHistoryPoint:
        """Move the pools to the quote's post-trade values."""
        self.ensure_open()
        self.contract.yes_pool = q.new_yes_pool
        self.contract.no_pool = q.new_no_pool
        self.contract.current_yes_probability = q.new_probability
        now = utc_now()
        self.contract.updated_at = now
        return self._snapshot(now)

    def close(self, resolution: str) -> None:
        if resolution not in (Side.YES, Side.NO):
            raise BetValidationError(f'resolution must be "yes" or "no", got {resolution!r}')
        if not self.is_open:
            raise ContractAlreadyResolvedError(self.contract.id, self.contract.resolution)
        now = utc_now()
        self.contract.status = ContractStatus.CLOSED.value
        self.contract.resolution = Side(resolution).value
        self.contract.resolved_at = now
        self.contract.updated_at = now

    def state(self) -> MarketState:
        return pricing.market_state(self.contract.yes_pool, self.contract.no_pool)

    def _snapshot(self, at: datetime) -> PriceHistoryPoint:
        return PriceHistoryPoint(
            contract_id=self.contract.id,
            yes_probability=self.contract.current_yes_probability,
            yes_pool=self.contract.yes_pool,
            no_pool=self.contract.no_pool,
            timestamp=at,
        )
