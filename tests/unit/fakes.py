"""Unit-test doubles: an AsyncSession stand-in and in-memory repositories.

The in-memory repositories follow the same contracts as the SQL ones
(conditional debit, status-guarded pool writes, settle-once payouts) so
service-level flows can be exercised without PostgreSQL.
"""

from dataclasses import replace
from datetime import datetime
from unittest.mock import AsyncMock

from src.pc_account.domain.models import User
from src.pc_betting.domain.models import Bet, BetView
from src.pc_common.datetime_utils import utc_now
from src.pc_contract.domain.models import Contract, PriceHistoryPoint
from src.pc_ranking.domain.models import LeaderboardEntry, UserRanking


class _Savepoint:
    def __init__(self, session: "FakeSession") -> None:
        self._session = session

    async def __aenter__(self) -> "_Savepoint":
        self._session.savepoints += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:  # type: ignore[no-untyped-def]
        if exc_type is not None:
            self._session.savepoint_rollbacks += 1
        return False


class FakeSession:
    """Supports ``async with db.begin_nested()`` plus awaited commit/rollback."""

    def __init__(self) -> None:
        self.commit = AsyncMock()
        self.rollback = AsyncMock()
        self.execute = AsyncMock()
        self.savepoints = 0
        self.savepoint_rollbacks = 0

    def begin_nested(self) -> _Savepoint:
        return _Savepoint(self)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def make_user(user_id: str = "user-1", coins: float = 1000.0, username: str | None = None) -> User:
    now = utc_now()
    return User(
        id=user_id,
        username=username or f"name-{user_id}",
        prediction_coins=coins,
        fantasy_coins=1000.0,
        created_at=now,
        updated_at=now,
    )


def make_contract(
    contract_id: str = "ctr-1",
    yes_pool: float = 500.0,
    no_pool: float = 500.0,
    status: str = "open",
    resolution: str | None = None,
) -> Contract:
    now = utc_now()
    total = yes_pool + no_pool
    return Contract(
        id=contract_id,
        title=f"Contract {contract_id}",
        description=None,
        category="general",
        creator_id=None,
        status=status,
        resolution=resolution,
        yes_pool=yes_pool,
        no_pool=no_pool,
        liquidity_pool=total,
        current_yes_probability=yes_pool / total if total else 0.5,
        closing_date=None,
        resolved_at=None,
        created_at=now,
        updated_at=now,
    )


def make_bet(
    bet_id: str = "bet-1",
    user_id: str = "user-1",
    contract_id: str = "ctr-1",
    position: str = "yes",
    amount: float = 100.0,
    shares: float = 200.0,
    purchase_price: float = 0.5,
    payout_amount: float = 0.0,
    settled_at: datetime | None = None,
) -> Bet:
    return Bet(
        id=bet_id,
        user_id=user_id,
        contract_id=contract_id,
        position=position,
        amount=amount,
        shares=shares,
        purchase_price=purchase_price,
        potential_payout=0.0,
        payout_amount=payout_amount,
        settled_at=settled_at,
        created_at=utc_now(),
    )


def make_ranking(user_id: str = "user-1", points: int = 0, tier: str = "Rookie", **kw) -> UserRanking:  # type: ignore[no-untyped-def]
    defaults = dict(global_rank=0, tier_rank=0, win_streak=0, best_streak=0, loss_streak=0)
    defaults.update(kw)
    return UserRanking(user_id=user_id, tier=tier, rank_points=points, **defaults)


# ---------------------------------------------------------------------------
# In-memory repositories
# ---------------------------------------------------------------------------

class InMemoryContracts:
    def __init__(self, *contracts: Contract) -> None:
        self.rows = {c.id: replace(c) for c in contracts}
        self.history: list[PriceHistoryPoint] = []

    async def get_contract(self, db, contract_id):  # type: ignore[no-untyped-def]
        c = self.rows.get(contract_id)
        return replace(c) if c else None

    get_contract_for_update = get_contract

    async def get_contract_by_title(self, db, title):  # type: ignore[no-untyped-def]
        return next((replace(c) for c in self.rows.values() if c.title == title), None)

    async def list_contracts(self, db, status, category, limit):  # type: ignore[no-untyped-def]
        return [replace(c) for c in self.rows.values()][:limit]

    async def insert_contract(self, db, contract):  # type: ignore[no-untyped-def]
        self.rows[contract.id] = replace(contract)

    async def update_pools(self, db, contract):  # type: ignore[no-untyped-def]
        row = self.rows.get(contract.id)
        if row is None or row.status != "open":
            return False
        row.yes_pool = contract.yes_pool
        row.no_pool = contract.no_pool
        row.current_yes_probability = contract.current_yes_probability
        return True

    async def close_contract(self, db, contract):  # type: ignore[no-untyped-def]
        row = self.rows.get(contract.id)
        if row is None or row.status != "open":
            return False
        row.status = "closed"
        row.resolution = contract.resolution
        row.resolved_at = contract.resolved_at
        return True

    async def append_price_point(self, db, point):  # type: ignore[no-untyped-def]
        point.id = len(self.history) + 1
        self.history.append(point)
        return point

    async def list_price_history(self, db, contract_id):  # type: ignore[no-untyped-def]
        return [p for p in self.history if p.contract_id == contract_id]


class InMemoryUsers:
    def __init__(self, *users: User) -> None:
        self.rows = {u.id: replace(u) for u in users}

    async def create_user(self, db, user_id, username, prediction_coins, fantasy_coins):  # type: ignore[no-untyped-def]
        now = utc_now()
        user = User(user_id, username, prediction_coins, fantasy_coins, now, now)
        self.rows[user_id] = user
        return replace(user)

    async def get_user(self, db, user_id):  # type: ignore[no-untyped-def]
        u = self.rows.get(user_id)
        return replace(u) if u else None

    async def get_user_by_username(self, db, username):  # type: ignore[no-untyped-def]
        return next((replace(u) for u in self.rows.values() if u.username == username), None)

    async def list_users(self, db, limit):  # type: ignore[no-untyped-def]
        return [replace(u) for u in self.rows.values()][:limit]

    async def debit_prediction_coins(self, db, user_id, amount):  # type: ignore[no-untyped-def]
        u = self.rows.get(user_id)
        if u is None or u.prediction_coins < amount:
            return None
        u.prediction_coins -= amount
        return replace(u)

    async def credit_prediction_coins(self, db, user_id, amount):  # type: ignore[no-untyped-def]
        u = self.rows.get(user_id)
        if u is None:
            return None
        u.prediction_coins += amount
        return replace(u)


class InMemoryBets:
    def __init__(self, contracts: InMemoryContracts | None = None) -> None:
        self.rows: list[Bet] = []
        self._contracts = contracts

    async def insert_bet(self, db, bet):  # type: ignore[no-untyped-def]
        self.rows.append(replace(bet))

    async def list_bets_for_contract(self, db, contract_id):  # type: ignore[no-untyped-def]
        return [replace(b) for b in self.rows if b.contract_id == contract_id]

    async def list_bets_for_user(self, db, user_id, open_only=False):  # type: ignore[no-untyped-def]
        views = []
        for b in reversed(self.rows):
            if b.user_id != user_id:
                continue
            c = self._contracts.rows[b.contract_id]  # type: ignore[union-attr]
            if open_only and c.status != "open":
                continue
            views.append(BetView(replace(b), c.title, c.status, c.resolution, c.yes_pool, c.no_pool))
        return views

    async def list_user_bets_in_contract(self, db, user_id, contract_id):  # type: ignore[no-untyped-def]
        return [
            replace(b)
            for b in reversed(self.rows)
            if b.user_id == user_id and b.contract_id == contract_id
        ]

    async def set_payout(self, db, bet_id, payout_amount, settled_at):  # type: ignore[no-untyped-def]
        for b in self.rows:
            if b.id == bet_id and b.settled_at is None:
                b.payout_amount = payout_amount
                b.settled_at = settled_at
                return True
        return False


class InMemoryRankings:
    def __init__(self, users: InMemoryUsers | None = None) -> None:
        self.rows: dict[str, UserRanking] = {}
        self._users = users

    async def get_ranking(self, db, user_id):  # type: ignore[no-untyped-def]
        r = self.rows.get(user_id)
        return replace(r) if r else None

    get_ranking_for_update = get_ranking

    async def upsert_ranking(self, db, ranking):  # type: ignore[no-untyped-def]
        existing = self.rows.get(ranking.user_id)
        row = replace(ranking)
        if existing is not None:
            row.global_rank, row.tier_rank = existing.global_rank, existing.tier_rank
        self.rows[ranking.user_id] = row

    async def list_rankings(self, db):  # type: ignore[no-untyped-def]
        return [replace(r) for r in self.rows.values()]

    async def update_ranks(self, db, rankings):  # type: ignore[no-untyped-def]
        for r in rankings:
            row = self.rows[r.user_id]
            row.global_rank, row.tier_rank = r.global_rank, r.tier_rank

    async def list_leaderboard(self, db, limit, tier):  # type: ignore[no-untyped-def]
        rows = sorted(self.rows.values(), key=lambda r: (-r.rank_points, r.user_id))
        if tier is not None:
            rows = [r for r in rows if r.tier == tier]
        names = self._users.rows if self._users else {}
        return [
            LeaderboardEntry(replace(r), names[r.user_id].username if r.user_id in names else "")
            for r in rows[:limit]
        ]
