"""
Market Calendar API Routes

Tells the entry form whether a date is a weekend or an exchange holiday, so
those days can be recorded as no-trade days.
"""

import datetime as dt

from fastapi import APIRouter
from pydantic import BaseModel

from pnl_dashboard.market_calendar.holidays import (
    holiday_name,
    is_holiday,
    is_trading_day,
    is_weekend,
)

router = APIRouter(prefix="/api/v1/calendar", tags=["calendar"])


class TradingDayResponse(BaseModel):
    date: dt.date
    is_weekend: bool
    is_holiday: bool
    holiday_name: str | None = None
    is_trading_day: bool


@router.get("/{day}", response_model=TradingDayResponse)
async def get_trading_day(day: dt.date) -> TradingDayResponse:
    return TradingDayResponse(
        date=day,
        is_weekend=is_weekend(day),
        is_holiday=is_holiday(day),
        holiday_name=holiday_name(day),
        is_trading_day=is_trading_day(day),
    )
