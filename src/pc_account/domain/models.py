"""Domain models for pc_account — pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    id: str
    username: str
    prediction_coins: float   # contracts currency; never negative
    fantasy_coins: float      # prop-bet currency; untouched by the contract core
    created_at: datetime
    updated_at: datetime
