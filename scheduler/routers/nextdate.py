"""Public endpoint exposing the next-date calculation."""
from fastapi import APIRouter, HTTPException, status, Query
from fastapi.responses import PlainTextResponse
from datetime import datetime

from scheduler.services.exceptions import RecurrenceError
from scheduler.services.next_date import next_date, parse_date

router = APIRouter(tags=["Next date"])


@router.get("/nextdate", response_class=PlainTextResponse)
async def get_next_date(
    now: str = Query("", description="Reference date YYYYMMDD, defaults to the current moment"),
    date: str = Query("", description="Start date YYYYMMDD"),
    repeat: str = Query("", description="Repeat rule, e.g. 'd 7' or 'w 1,5'"),
):
    """Return the next occurrence of ``date`` under ``repeat`` as plain text."""
    if now:
        try:
            moment = datetime.combine(parse_date(now), datetime.min.time())
        except ValueError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid now parameter: {e}"
            )
    else:
        moment = datetime.now()

    try:
        return next_date(moment, date, repeat)
    except RecurrenceError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot calculate the next date: {e.message}"
        )
