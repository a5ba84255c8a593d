"""Pydantic schemas for pc_account API requests and responses."""

from pydantic import BaseModel, Field, field_validator

from src.pc_account.domain.models import User


class CreateUserRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=64)

    @field_validator("username")
    @classmethod
    def _strip_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("username must be at least 3 non-blank characters")
        return v


class UserDetail(BaseModel):
    id: str
    username: str
    prediction_coins: float
    fantasy_coins: float
    created_at: str

    @classmethod
    def from_domain(cls, u: User) -> "UserDetail":
        return cls(
            id=u.id,
            username=u.username,
            prediction_coins=u.prediction_coins,
            fantasy_coins=u.fantasy_coins,
            created_at=u.created_at.isoformat(),
        )


class UserListResponse(BaseModel):
    items: list[UserDetail]
    count: int


class BalanceResponse(BaseModel):
    user_id: str
    prediction_coins: float
    fantasy_coins: float
