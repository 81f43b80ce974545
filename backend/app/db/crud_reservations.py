# app/db/crud_reservations.py

from dataclasses import dataclass
from datetime import date
from typing import List, Union

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.models import Listing, Reservation


@dataclass(frozen=True)
class ByListing:
    listing_id: int


@dataclass(frozen=True)
class ByUser:
    """Reservations the user made as a guest."""

    user_id: int


@dataclass(frozen=True)
class ByOwner:
    """Reservations made on listings the user owns."""

    owner_id: int


ReservationQuery = Union[ByListing, ByUser, ByOwner]


def _condition(query: ReservationQuery):
    if isinstance(query, ByListing):
        return Reservation.listing_id == query.listing_id
    if isinstance(query, ByUser):
        return Reservation.user_id == query.user_id
    if isinstance(query, ByOwner):
        return Reservation.listing.has(Listing.user_id == query.owner_id)
    raise TypeError(f"Unknown reservation query: {query!r}")


async def list_reservations(db: AsyncSession, *queries: ReservationQuery) -> List[Reservation]:
    """
    Reservations matching every query given (no query = all), newest first,
    with their listing loaded.
    """
    stmt = select(Reservation).options(selectinload(Reservation.listing))
    if queries:
        stmt = stmt.where(and_(*[_condition(q) for q in queries]))
    stmt = stmt.order_by(Reservation.created_at.desc(), Reservation.id.desc())
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def create_reservation(
    db: AsyncSession,
    *,
    listing_id: int,
    user_id: int,
    start_date: date,
    end_date: date,
    total_price: int,
) -> Reservation:
    reservation = Reservation(
        listing_id=listing_id,
        user_id=user_id,
        start_date=start_date,
        end_date=end_date,
        total_price=total_price,
    )
    db.add(reservation)
    await db.commit()
    await db.refresh(reservation)
    return reservation


async def delete_reservation(db: AsyncSession, reservation_id: int, user_id: int) -> int:
    """
    Delete a reservation if ``user_id`` booked it or owns its listing.
    Returns the number of rows removed; 0 covers both "missing" and "not yours".
    """
    owned_listings = select(Listing.id).where(Listing.user_id == user_id)
    stmt = (
        delete(Reservation)
        .where(
            Reservation.id == reservation_id,
            or_(
                Reservation.user_id == user_id,
                Reservation.listing_id.in_(owned_listings),
            ),
        )
        .execution_options(synchronize_session=False)
    )
    res = await db.execute(stmt)
    await db.commit()
    return int(res.rowcount or 0)
