"""Domain models for sugar reduction plans."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class PlanType(Enum):
    """How the user approaches cutting added sugar."""

    COLD_TURKEY = "cold_turkey"
    GRADUAL = "gradual"


@dataclass(frozen=True)
class WeeklyLimit:
    week: int
    daily_grams: float
    title: str
    description: str


@dataclass(frozen=True)
class PlanDetails:
    type: PlanType
    name: str
    tagline: str
    description: str
    weekly_limits: tuple[WeeklyLimit, ...]
    tips: tuple[str, ...]


@dataclass(frozen=True)
class PlanGuidance:
    """What the plan allows today and how the day's check-in measures up."""

    plan: PlanType
    day: date
    week_number: int
    total_weeks: int
    limit_grams: float
    title: str
    description: str
    tip: str
    is_complete: bool
    progress: str
    grams_consumed: float | None = None
    within_limit: bool | None = None
