"""UserRepository — concrete implementation of UserRepositoryProtocol.

Balance mutations are single atomic UPDATE ... RETURNING statements.
A debit returning 0 rows means the balance was insufficient (or the user
does not exist); the balance can therefore never go negative.

Transaction ownership: the CALLER (application service or engine) starts and
commits the transaction.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pc_account.domain.models import User

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_USER_COLUMNS = "id, username, prediction_coins, fantasy_coins, created_at, updated_at"

_INSERT_USER_SQL = text(f"""
    INSERT INTO users (id, username, prediction_coins, fantasy_coins)
    VALUES (:id, :username, :prediction_coins, :fantasy_coins)
    RETURNING {_USER_COLUMNS}
""")

_GET_USER_SQL = text(f"SELECT {_USER_COLUMNS} FROM users WHERE id = :user_id")

_GET_USER_BY_USERNAME_SQL = text(f"SELECT {_USER_COLUMNS} FROM users WHERE username = :username")

_LIST_USERS_SQL = text(f"""
    SELECT {_USER_COLUMNS} FROM users
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")

_DEBIT_SQL = text(f"""
    UPDATE users
    SET prediction_coins = prediction_coins - :amount,
        updated_at = NOW()
    WHERE id = :user_id AND prediction_coins >= :amount
    RETURNING {_USER_COLUMNS}
""")

_CREDIT_SQL = text(f"""
    UPDATE users
    SET prediction_coins = prediction_coins + :amount,
        updated_at = NOW()
    WHERE id = :user_id
    RETURNING {_USER_COLUMNS}
""")


def _row_to_user(row: object) -> User:
    return User(
        id=row.id,  # type: ignore[attr-defined]
        username=row.username,  # type: ignore[attr-defined]
        prediction_coins=float(row.prediction_coins),  # type: ignore[attr-defined]
        fantasy_coins=float(row.fantasy_coins),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class UserRepository:
    async def create_user(
        self,
        db: AsyncSession,
        user_id: str,
        username: str,
        prediction_coins: float,
        fantasy_coins: float,
    ) -> User:
        result = await db.execute(
            _INSERT_USER_SQL,
            {
                "id": user_id,
                "username": username,
                "prediction_coins": prediction_coins,
                "fantasy_coins": fantasy_coins,
            },
        )
        return _row_to_user(result.fetchone())

    async def get_user(self, db: AsyncSession, user_id: str) -> User | None:
        row = (await db.execute(_GET_USER_SQL, {"user_id": user_id})).fetchone()
        return _row_to_user(row) if row else None

    async def get_user_by_username(
        self, db: AsyncSession, username: str
    ) -> User | None:
        row = (await db.execute(_GET_USER_BY_USERNAME_SQL, {"username": username})).fetchone()
        return _row_to_user(row) if row else None

    async def list_users(self, db: AsyncSession, limit: int) -> list[User]:
        rows = (await db.execute(_LIST_USERS_SQL, {"limit": limit})).fetchall()
        return [_row_to_user(r) for r in rows]

    async def debit_prediction_coins(
        self, db: AsyncSession, user_id: str, amount: float
    ) -> User | None:
        """Conditional debit. None when the balance is below ``amount``."""
        row = (await db.execute(_DEBIT_SQL, {"user_id": user_id, "amount": amount})).fetchone()
        return _row_to_user(row) if row else None

    async def credit_prediction_coins(
        self, db: AsyncSession, user_id: str, amount: float
    ) -> User | None:
        row = (await db.execute(_CREDIT_SQL, {"user_id": user_id, "amount": amount})).fetchone()
        return _row_to_user(row) if row else None
