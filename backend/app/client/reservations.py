import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Sequence

from app.client.api import MarketplaceClient
from app.client.notifications import LoggingNotifier
from app.core.errors import ApiError, LoginRequired
from app.domain.availability import DateRange, disabled_dates, total_price

logger = logging.getLogger(__name__)


class ReservationPanel:
    """
    Reservation box of a listing page: booked days, the picked range, its price
    and the "Reserve" action.
    """

    def __init__(
        self,
        listing: Dict[str, Any],
        reservations: Sequence[Any] = (),
        current_user: Optional[Dict[str, Any]] = None,
        client: Optional[MarketplaceClient] = None,
        notifier=None,
        on_login_required: Optional[Callable[[], None]] = None,
    ):
        self.listing = listing
        self.reservations = list(reservations)
        self.current_user = current_user
        self.client = client or MarketplaceClient()
        self.notifier = notifier or LoggingNotifier()
        self.on_login_required = on_login_required
        self.date_range = DateRange.today()
        self.is_loading = False

    @property
    def nightly_price(self) -> int:
        return self.listing["price"]

    @property
    def disabled_dates(self) -> List[date]:
        return disabled_dates(self.reservations)

    @property
    def total_price(self) -> int:
        return total_price(self.date_range, self.nightly_price)

    def change_dates(self, start_date: Optional[date], end_date: Optional[date]) -> None:
        self.date_range = DateRange(start_date=start_date, end_date=end_date)

    def reserve(self) -> Optional[Dict[str, Any]]:
        if not self.current_user:
            if self.on_login_required is None:
                raise LoginRequired(f"Reserving listing {self.listing['id']} needs a logged-in user")
            self.on_login_required()
            return None

        if not self.date_range.is_complete:
            self.notifier.error("Please pick your dates.")
            return None

        self.is_loading = True
        try:
            result = self.client.create_reservation(
                listing_id=self.listing["id"],
                start_date=self.date_range.start_date,
                end_date=self.date_range.end_date,
                total_price=self.total_price,
            )
        except ApiError as e:
            logger.warning(f"Reservation for listing {self.listing['id']} failed: {e}")
            self.notifier.error("Something went wrong.")
            return None
        finally:
            self.is_loading = False

        self.notifier.success("Listing reserved!")
        self.date_range = DateRange.today()
        # the API answers with the listing and all of its reservations
        if result and "reservations" in result:
            self.reservations = list(result["reservations"])
        return result
