from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class SessionPricing:
    session_dates: tuple[date, ...]
    sessions_per_day: int
    unit_price: Decimal
    total_sessions: int
    total_price: Decimal  # full precision, round only for display
