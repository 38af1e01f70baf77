"""
Daily P&L API Routes

Endpoints:
- GET    /api/v1/pnl                 - List entries ascending (optional start/end)
- GET    /api/v1/pnl/{trade_date}    - Entry for a date
- PUT    /api/v1/pnl/{trade_date}    - Upsert a day's P&L (201 created, 200 overwritten)
- DELETE /api/v1/pnl/{entry_id}      - Delete entry
"""

from datetime import date
from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from pnl_dashboard.api.dependencies import get_current_user_id
from pnl_dashboard.database import get_db
from pnl_dashboard.models.pnl import DailyPnLListResponse, DailyPnLResponse, DailyPnLUpsert
from pnl_dashboard.repositories.pnl_repository import DailyPnLRepository

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/pnl", tags=["pnl"])


@router.get("", response_model=DailyPnLListResponse)
async def list_daily_pnl(
    start: Optional[date] = Query(None, description="First date (inclusive)"),
    end: Optional[date] = Query(None, description="Last date (inclusive)"),
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
) -> DailyPnLListResponse:
    """List the account's daily P&L ascending by date."""
    if start is not None and end is not None and start > end:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="start must not be after end",
        )

    repo = DailyPnLRepository(db)
    entries = await repo.list_entries(user_id=user_id, start=start, end=end)
    data = [DailyPnLResponse.from_model(e) for e in entries]

    return DailyPnLListResponse(
        data=data,
        summary={
            "count": len(data),
            "total_pnl": sum(e.pnl for e in data),
            "win_days": sum(1 for e in data if e.pnl > 0),
            "loss_days": sum(1 for e in data if e.pnl < 0),
            "no_trade_days": sum(1 for e in data if e.is_no_trade_day),
        },
    )


@router.get("/{trade_date}", response_model=DailyPnLResponse)
async def get_daily_pnl(
    trade_date: date,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
) -> DailyPnLResponse:
    repo = DailyPnLRepository(db)
    entry = await repo.get_by_date(user_id=user_id, trade_date=trade_date)
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No P&L recorded for {trade_date.isoformat()}",
        )
    return DailyPnLResponse.from_model(entry)


@router.put("/{trade_date}", response_model=DailyPnLResponse)
async def upsert_daily_pnl(
    trade_date: date,
    payload: DailyPnLUpsert,
    response: Response,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
) -> DailyPnLResponse:
    """
    Record the P&L for a date.

    Writing a date that already has a record overwrites it. A pnl of 0 marks
    the date as a no-trade day.
    """
    repo = DailyPnLRepository(db)
    entry, created = await repo.upsert_by_date(
        user_id=user_id, trade_date=trade_date, pnl=payload.pnl
    )
    await db.commit()

    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return DailyPnLResponse.from_model(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_daily_pnl(
    entry_id: UUID,
    db: AsyncSession = Depends(get_db),
    user_id: UUID = Depends(get_current_user_id),
) -> None:
    repo = DailyPnLRepository(db)
    deleted = await repo.delete(entry_id=entry_id, user_id=user_id)
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="P&L entry not found")
    await db.commit()
