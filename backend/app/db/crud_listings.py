# app/db/crud_listings.py
from typing import Tuple, List, Dict, Any, Optional

from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.models import Listing, Reservation
from app.domain.categories import all_categories


async def list_categories(db: AsyncSession) -> List[Dict[str, Any]]:
    """
    Every category with its description and how many listings use it.
    """
    stmt = (
        select(Listing.category, func.count(Listing.id).label("count"))
        .group_by(Listing.category)
    )
    res = await db.execute(stmt)
    counts = {r.category: int(r.count) for r in res.all()}
    return [{**c, "count": counts.get(c["label"], 0)} for c in all_categories()]


async def list_listings(
    db: AsyncSession,
    filters: dict = None,
    page: int = 1,
    per_page: int = 20,
) -> Tuple[List[Listing], int]:
    """
    Public listing search. Counts are minimums; a start/end date pair keeps
    only listings with no reservation touching that range.
    """
    filters = filters or {}
    stmt = select(Listing)

    where_clauses = []

    if filters.get("user_id") is not None:
        where_clauses.append(Listing.user_id == filters["user_id"])
    if filters.get("category"):
        where_clauses.append(Listing.category == filters["category"])
    if filters.get("location_value"):
        where_clauses.append(Listing.location_value == filters["location_value"])
    if filters.get("guest_count") is not None:
        where_clauses.append(Listing.guest_count >= int(filters["guest_count"]))
    if filters.get("room_count") is not None:
        where_clauses.append(Listing.room_count >= int(filters["room_count"]))
    if filters.get("bathroom_count") is not None:
        where_clauses.append(Listing.bathroom_count >= int(filters["bathroom_count"]))

    start, end = filters.get("start_date"), filters.get("end_date")
    if start is not None and end is not None:
        where_clauses.append(
            ~Listing.reservations.any(
                and_(Reservation.start_date <= end, Reservation.end_date >= start)
            )
        )

    if where_clauses:
        stmt = stmt.where(and_(*where_clauses))

    # newest first
    stmt = stmt.order_by(Listing.created_at.desc(), Listing.id.desc())

    count_stmt = select(func.count()).select_from(stmt.subquery())
    total_res = await db.execute(count_stmt)
    total = total_res.scalar_one()

    offset = (page - 1) * per_page
    stmt = stmt.offset(offset).limit(per_page)
    res = await db.execute(stmt)
    items = list(res.scalars().all())
    return items, int(total)


async def get_listing(db: AsyncSession, listing_id: int) -> Optional[Listing]:
    res = await db.execute(select(Listing).where(Listing.id == listing_id))
    return res.scalars().first()


async def get_listing_detail(db: AsyncSession, listing_id: int) -> Optional[Listing]:
    """
    Listing with owner and reservations loaded up front, so pydantic never
    triggers a lazy load (MissingGreenlet under asyncio).
    """
    stmt = (
        select(Listing)
        .options(selectinload(Listing.user), selectinload(Listing.reservations))
        .where(Listing.id == listing_id)
        .execution_options(populate_existing=True)
    )
    res = await db.execute(stmt)
    return res.scalars().first()


async def create_listing(db: AsyncSession, **kwargs) -> Listing:
    listing = Listing(**kwargs)
    db.add(listing)
    await db.commit()
    await db.refresh(listing)
    return listing


async def delete_listing(db: AsyncSession, listing: Listing) -> bool:
    await db.delete(listing)
    await db.commit()
    return True
