"""ContractRepository — concrete implementation of ContractRepositoryProtocol.

All queries use raw text() SQL (no ORM).
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.

Pool and status writes are guarded by ``status = 'open'`` so a closed
contract can never be mutated, even by a caller that skipped the lock.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_contract.domain.models import Contract, PriceHistoryPoint

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_CONTRACT_COLUMNS = """
    id, title, description, category, creator_id, status, resolution,
    yes_pool, no_pool, liquidity_pool, current_yes_probability,
    closing_date, resolved_at, created_at, updated_at
"""

_GET_CONTRACT_SQL = text(f"SELECT {_CONTRACT_COLUMNS} FROM contracts WHERE id = :contract_id")

_GET_CONTRACT_FOR_UPDATE_SQL = text(
    f"SELECT {_CONTRACT_COLUMNS} FROM contracts WHERE id = :contract_id FOR UPDATE"
)

_GET_CONTRACT_BY_TITLE_SQL = text(f"SELECT {_CONTRACT_COLUMNS} FROM contracts WHERE title = :title")

_LIST_CONTRACTS_SQL = text(f"""
    SELECT {_CONTRACT_COLUMNS}
    FROM contracts
    WHERE
        (CAST(:status AS TEXT) IS NULL OR status = CAST(:status AS TEXT))
        AND (CAST(:category AS TEXT) IS NULL OR category = CAST(:category AS TEXT))
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")

_INSERT_CONTRACT_SQL = text("""
    INSERT INTO contracts
        (id, title, description, category, creator_id, status, resolution,
         yes_pool, no_pool, liquidity_pool, current_yes_probability,
         closing_date, created_at, updated_at)
    VALUES
        (:id, :title, :description, :category, :creator_id, :status, NULL,
         :yes_pool, :no_pool, :liquidity_pool, :current_yes_probability,
         :closing_date, :created_at, :updated_at)
""")

_UPDATE_POOLS_SQL = text("""
    UPDATE contracts
    SET yes_pool = :yes_pool,
        no_pool = :no_pool,
        current_yes_probability = :current_yes_probability,
        updated_at = NOW()
    WHERE id = :id AND status = 'open'
    RETURNING id
""")

_CLOSE_CONTRACT_SQL = text("""
    UPDATE contracts
    SET status = 'closed',
        resolution = :resolution,
        resolved_at = :resolved_at,
        updated_at = NOW()
    WHERE id = :id AND status = 'open'
    RETURNING id
""")

_INSERT_PRICE_POINT_SQL = text("""
    INSERT INTO contract_price_history
        (contract_id, yes_probability, yes_pool, no_pool, recorded_at)
    VALUES
        (:contract_id, :yes_probability, :yes_pool, :no_pool, :recorded_at)
    RETURNING id
""")

_LIST_PRICE_HISTORY_SQL = text("""
    SELECT id, contract_id, yes_probability, yes_pool, no_pool, recorded_at
    FROM contract_price_history
    WHERE contract_id = :contract_id
    ORDER BY recorded_at ASC, id ASC
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------

def _row_to_contract(row: object) -> Contract:
    return Contract(
        id=row.id,  # type: ignore[attr-defined]
        title=row.title,  # type: ignore[attr-defined]
        description=row.description,  # type: ignore[attr-defined]
        category=row.category,  # type: ignore[attr-defined]
        creator_id=row.creator_id,  # type: ignore[attr-defined]
        status=row.status,  # type: ignore[attr-defined]
        resolution=row.resolution,  # type: ignore[attr-defined]
        yes_pool=float(row.yes_pool),  # type: ignore[attr-defined]
        no_pool=float(row.no_pool),  # type: ignore[attr-defined]
        liquidity_pool=float(row.liquidity_pool),  # type: ignore[attr-defined]
        current_yes_probability=float(row.current_yes_probability),  # type: ignore[attr-defined]
        closing_date=row.closing_date,  # type: ignore[attr-defined]
        resolved_at=row.resolved_at,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _row_to_price_point(row: object) -> PriceHistoryPoint:
    return PriceHistoryPoint(
        id=row.id,  # type: ignore[attr-defined]
        contract_id=row.contract_id,  # type: ignore[attr-defined]
        yes_probability=float(row.yes_probability),  # type: ignore[attr-defined]
        yes_pool=float(row.yes_pool),  # type: ignore[attr-defined]
        no_pool=float(row.no_pool),  # type: ignore[attr-defined]
        timestamp=row.recorded_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class ContractRepository:
    """Concrete repository. Transactions are owned by the caller."""

    async def get_contract(
        self, db: AsyncSession, contract_id: str
    ) -> Contract | None:
        result = await db.execute(_GET_CONTRACT_SQL, {"contract_id": contract_id})
        row = result.fetchone()
        return _row_to_contract(row) if row else None

    async def get_contract_for_update(
        self, db: AsyncSession, contract_id: str
    ) -> Contract | None:
        """Row-locks the contract until the surrounding transaction ends."""
        result = await db.execute(_GET_CONTRACT_FOR_UPDATE_SQL, {"contract_id": contract_id})
        row = result.fetchone()
        return _row_to_contract(row) if row else None

    async def get_contract_by_title(
        self, db: AsyncSession, title: str
    ) -> Contract | None:
        result = await db.execute(_GET_CONTRACT_BY_TITLE_SQL, {"title": title})
        row = result.fetchone()
        return _row_to_contract(row) if row else None

    async def list_contracts(
        self,
        db: AsyncSession,
        status: str | None,
        category: str | None,
        limit: int,
    ) -> list[Contract]:
        result = await db.execute(
            _LIST_CONTRACTS_SQL,
            {"status": status, "category": category, "limit": limit},
        )
        return [_row_to_contract(row) for row in result.fetchall()]

    async def insert_contract(self, db: AsyncSession, contract: Contract) -> None:
        await db.execute(
            _INSERT_CONTRACT_SQL,
            {
                "id": contract.id,
                "title": contract.title,
                "description": contract.description,
                "category": contract.category,
                "creator_id": contract.creator_id,
                "status": contract.status,
                "yes_pool": contract.yes_pool,
                "no_pool": contract.no_pool,
                "liquidity_pool": contract.liquidity_pool,
                "current_yes_probability": contract.current_yes_probability,
                "closing_date": contract.closing_date,
                "created_at": contract.created_at,
                "updated_at": contract.updated_at,
            },
        )

    async def update_pools(self, db: AsyncSession, contract: Contract) -> bool:
        """Persist pools + probability. False if the contract is no longer open."""
        result = await db.execute(
            _UPDATE_POOLS_SQL,
            {
                "id": contract.id,
                "yes_pool": contract.yes_pool,
                "no_pool": contract.no_pool,
                "current_yes_probability": contract.current_yes_probability,
            },
        )
        return result.fetchone() is not None

    async def close_contract(self, db: AsyncSession, contract: Contract) -> bool:
        """Persist the open -> closed transition. False if it was already closed."""
        result = await db.execute(
            _CLOSE_CONTRACT_SQL,
            {
                "id": contract.id,
                "resolution": contract.resolution,
                "resolved_at": contract.resolved_at,
            },
        )
        return result.fetchone() is not None

    async def append_price_point(
        self, db: AsyncSession, point: PriceHistoryPoint
    ) -> PriceHistoryPoint:
        result = await db.execute(
            _INSERT_PRICE_POINT_SQL,
            {
                "contract_id": point.contract_id,
                "yes_probability": point.yes_probability,
                "yes_pool": point.yes_pool,
                "no_pool": point.no_pool,
                "recorded_at": point.timestamp,
            },
        )
        point.id = result.scalar_one()
        return point

    async def list_price_history(
        self, db: AsyncSession, contract_id: str
    ) -> list[PriceHistoryPoint]:
        result = await db.execute(_LIST_PRICE_HISTORY_SQL, {"contract_id": contract_id})
        return [_row_to_price_point(row) for row in result.fetchall()]
