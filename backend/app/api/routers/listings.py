# app/api/routers/listings.py
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import CurrentUser
from app.api.routers.reservations import listing_detail
from app.db.session import get_db
from app.db import crud_listings
from app.domain.categories import Category
from app.schemas.listing import CategoryOut, ListingCreate, ListingOut, ListingsPage
from app.schemas.reservation import EmptyState

logger = logging.getLogger(__name__)

router = APIRouter()

NO_MATCHES = EmptyState(
    title="No exact matches",
    subtitle="Try changing or removing some of your filters.",
    show_reset=True,
)


@router.get("/categories", response_model=list[CategoryOut])
async def get_categories(db: AsyncSession = Depends(get_db)):
    return await crud_listings.list_categories(db)


@router.get("/listings")
async def list_listings(
    db: AsyncSession = Depends(get_db),
    category: Optional[Category] = None,
    user_id: Optional[int] = None,
    location_value: Optional[str] = None,
    guest_count: Optional[int] = Query(None, ge=1),
    room_count: Optional[int] = Query(None, ge=1),
    bathroom_count: Optional[int] = Query(None, ge=1),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
):
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="Invalid dates")

    filters = {
        "category": category.value if category else None,
        "user_id": user_id,
        "location_value": location_value,
        "guest_count": guest_count,
        "room_count": room_count,
        "bathroom_count": bathroom_count,
        "start_date": start_date,
        "end_date": end_date,
    }
    items, total = await crud_listings.list_listings(
        db,
        filters=filters,
        page=page,
        per_page=per_page,
    )
    page_obj = ListingsPage(
        items=[ListingOut.model_validate(listing) for listing in items],
        total=total,
        page=page,
        per_page=per_page,
        empty_state=None if total else NO_MATCHES,
    )
    return {"success": True, "data": page_obj.model_dump()}


@router.get("/listings/{listing_id}")
async def get_listing(listing_id: int, db: AsyncSession = Depends(get_db)):
    """
    Listing page: owner, reservations and the days the calendar must disable.
    """
    listing = await crud_listings.get_listing_detail(db, listing_id)
    if not listing:
        raise HTTPException(status_code=404, detail="Not found")
    return {"success": True, "data": listing_detail(listing).model_dump()}


@router.post("/listings", status_code=201)
async def create_listing(
    body: ListingCreate,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    listing = await crud_listings.create_listing(
        db,
        user_id=current_user.id,
        title=body.title,
        description=body.description,
        image_src=body.image_src,
        category=body.category.value,
        room_count=body.room_count,
        bathroom_count=body.bathroom_count,
        guest_count=body.guest_count,
        location_value=body.location.value,
        price=body.price,
    )
    logger.info(f"user {current_user.id} created listing {listing.id}")
    return {"success": True, "data": ListingOut.model_validate(listing).model_dump()}


@router.delete("/listings/{listing_id}")
async def delete_listing(
    listing_id: int,
    current_user: CurrentUser,
    db: AsyncSession = Depends(get_db),
):
    """
    Owner only. Reservations on the listing go with it.
    """
    listing = await crud_listings.get_listing(db, listing_id)
    if not listing:
        raise HTTPException(status_code=404, detail="Not found")

    if listing.user_id != current_user.id:
        raise HTTPException(status_code=403, detail="Not allowed")

    await crud_listings.delete_listing(db, listing)
    return {"message": "deleted"}
