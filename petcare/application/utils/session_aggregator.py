from __future__ import annotations

from datetime import date
from decimal import Decimal

from petcare.domain.entities.pricing import SessionPricing


def aggregate(
    schedule: tuple[date, ...] | list[date],
    sessions_per_day: int,
    unit_price: Decimal | int | float | str,
) -> SessionPricing:
    """
    Total sessions and price for a generated schedule. A negative slot count
    or price is not a bookable combination and yields an empty pricing.
    """
    price = to_decimal(unit_price)
    if sessions_per_day < 0 or price < 0:
        return SessionPricing(
            session_dates=(),
            sessions_per_day=max(sessions_per_day, 0),
            unit_price=max(price, Decimal("0")),
            total_sessions=0,
            total_price=Decimal("0"),
        )

    total_sessions = len(schedule) * sessions_per_day
    return SessionPricing(
        session_dates=tuple(schedule),
        sessions_per_day=sessions_per_day,
        unit_price=price,
        total_sessions=total_sessions,
        total_price=price * total_sessions,
    )


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 99.9 as 99.9 instead of its binary float expansion
    return Decimal(str(value))
