import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import CurrentUser
from app.core.config import settings
from app.db import crud_listings, crud_reservations
from app.db.crud_reservations import ByListing, ByOwner, ByUser
from app.db.session import get_db
from app.domain.availability import DateRange, disabled_dates, night_count, overlapping_days
from app.schemas.listing import ListingDetail, ReservationWithListing
from app.schemas.reservation import DeleteResult, ReservationCreate

logger = logging.getLogger(__name__)

router = APIRouter()


def listing_detail(listing) -> ListingDetail:
    detail = ListingDetail.model_validate(listing)
    detail.disabled_dates = disabled_dates(listing.reservations)
    return detail


@router.post("")
async def create_reservation(
    body: ReservationCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    if body.start_date > body.end_date or body.start_date < date.today():
        raise HTTPException(status_code=400, detail="Invalid dates")
    if night_count(body.start_date, body.end_date) > settings.MAX_STAY_DAYS:
        raise HTTPException(
            status_code=400,
            detail=f"Stays are limited to {settings.MAX_STAY_DAYS} nights",
        )

    listing = await crud_listings.get_listing_detail(db, body.listing_id)
    if not listing:
        raise HTTPException(status_code=404, detail="Listing not found")

    taken = overlapping_days(DateRange(body.start_date, body.end_date), listing.reservations)
    if taken:
        raise HTTPException(
            status_code=409,
            detail=f"Dates already reserved: {', '.join(d.isoformat() for d in taken)}",
        )

    reservation = await crud_reservations.create_reservation(
        db,
        listing_id=listing.id,
        user_id=current_user.id,
        start_date=body.start_date,
        end_date=body.end_date,
        total_price=body.total_price,
    )
    logger.info(
        f"user {current_user.id} reserved listing {listing.id} "
        f"({reservation.start_date} - {reservation.end_date})"
    )

    listing = await crud_listings.get_listing_detail(db, listing.id)
    return {"success": True, "data": listing_detail(listing).model_dump()}


@router.get("")
async def list_reservations(
    listing_id: Optional[int] = None,
    user_id: Optional[int] = None,
    author_id: Optional[int] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    author_id = owner of the listings the reservations were made on.
    Given filters are combined; none returns everything.
    """
    queries = []
    if listing_id is not None:
        queries.append(ByListing(listing_id))
    if user_id is not None:
        queries.append(ByUser(user_id))
    if author_id is not None:
        queries.append(ByOwner(author_id))

    reservations = await crud_reservations.list_reservations(db, *queries)
    return {
        "items": [ReservationWithListing.model_validate(r).model_dump() for r in reservations]
    }


@router.delete("/{reservation_id}", response_model=DeleteResult)
async def cancel_reservation(
    reservation_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """
    Guest who booked or host who owns the listing may cancel. Anything else
    deletes nothing and still answers 200 with count 0.
    """
    count = await crud_reservations.delete_reservation(db, reservation_id, current_user.id)
    if count:
        logger.info(f"user {current_user.id} cancelled reservation {reservation_id}")
    return DeleteResult(count=count)
