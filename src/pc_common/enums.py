"""Global enums — must match DB CHECK constraints exactly."""

from enum import Enum


class ContractStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class Side(str, Enum):
    """Position on a binary contract; also used as the resolution value."""
    YES = "yes"
    NO = "no"


class ContractCategory(str, Enum):
    GENERAL = "general"
    SPORTS = "sports"
    POLITICS = "politics"
    ENTERTAINMENT = "entertainment"
    FINANCE = "finance"
    WEATHER = "weather"
    TECHNOLOGY = "technology"


class BetResult(str, Enum):
    WIN = "win"
    LOSS = "loss"


class BetOutcomeStatus(str, Enum):
    """Outcome of a bet as seen in a user's history."""
    PENDING = "pending"
    WIN = "win"
    LOSS = "loss"


class Tier(str, Enum):
    ROOKIE = "Rookie"
    AMATEUR = "Amateur"
    SEMI_PRO = "Semi-Pro"
    PROFESSIONAL = "Professional"
    EXPERT = "Expert"
    MASTER = "Master"
    LEGEND = "Legend"
