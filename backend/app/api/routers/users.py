from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import CurrentUser, OptionalUser
from app.db import crud_reservations
from app.db.crud_reservations import ByOwner, ByUser
from app.db.session import get_db
from app.schemas.listing import ReservationWithListing, ReservationsPage
from app.schemas.reservation import EmptyState
from app.schemas.user import UserBase

router = APIRouter()

UNAUTHORIZED = EmptyState(title="Unauthorized", subtitle="Please login")


@router.get("/me")
async def me(current_user: CurrentUser):
    return UserBase.model_validate(current_user)


def _page(reservations, empty: EmptyState) -> ReservationsPage:
    items = [ReservationWithListing.model_validate(r) for r in reservations]
    return ReservationsPage(items=items, empty_state=None if items else empty)


@router.get("/me/trips", response_model=ReservationsPage)
async def my_trips(current_user: OptionalUser, db: AsyncSession = Depends(get_db)):
    """
    Reservations the caller made as a guest.
    """
    if current_user is None:
        return ReservationsPage(items=[], empty_state=UNAUTHORIZED)

    reservations = await crud_reservations.list_reservations(db, ByUser(current_user.id))
    return _page(
        reservations,
        EmptyState(
            title="No trips found",
            subtitle="Looks like you haven't reserved any trips.",
        ),
    )


@router.get("/me/reservations", response_model=ReservationsPage)
async def reservations_on_my_listings(
    current_user: OptionalUser,
    db: AsyncSession = Depends(get_db),
):
    """
    Reservations other people made on the caller's listings.
    """
    if current_user is None:
        return ReservationsPage(items=[], empty_state=UNAUTHORIZED)

    reservations = await crud_reservations.list_reservations(db, ByOwner(current_user.id))
    return _page(
        reservations,
        EmptyState(
            title="No reservations found",
            subtitle="Looks like you have no reservations on your properties.",
        ),
    )
