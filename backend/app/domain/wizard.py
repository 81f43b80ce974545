# app/domain/wizard.py
import logging
from enum import IntEnum
from typing import Any, Callable, Dict, Optional, Set, Tuple

from app.core.errors import ApiError

logger = logging.getLogger(__name__)


class Step(IntEnum):
    CATEGORY = 0
    LOCATION = 1
    INFO = 2
    IMAGES = 3
    DESCRIPTION = 4
    PRICE = 5


STEP_FIELDS: Dict[Step, Tuple[str, ...]] = {
    Step.CATEGORY: ("category",),
    Step.LOCATION: ("location",),
    Step.INFO: ("guest_count", "room_count", "bathroom_count"),
    Step.IMAGES: ("image_src",),
    Step.DESCRIPTION: ("title", "description"),
    Step.PRICE: ("price",),
}

DEFAULT_FIELDS: Dict[str, Any] = {
    "category": "",
    "location": None,
    "guest_count": 1,
    "room_count": 1,
    "bathroom_count": 1,
    "image_src": "",
    "price": 1,
    "title": "",
    "description": "",
}

REQUIRED_FIELDS = ("title", "description", "price")
COUNT_FIELDS = ("guest_count", "room_count", "bathroom_count")


class WizardStateError(Exception):
    """Transition requested from a step that does not allow it"""


def _whole_number(value: Any) -> Optional[int]:
    # same values ListingCreate accepts: ints, integral floats, digit strings
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _validate(name: str, value: Any) -> Optional[str]:
    if name in REQUIRED_FIELDS and (value is None or value == ""):
        return "This field is required"
    if name in COUNT_FIELDS or name == "price":
        number = _whole_number(value)
        if number is None:
            return "Must be a whole number"
        if number < 1:
            return "Must be at least 1"
    return None


class ListingWizard:
    """
    "Airbnb your home!" dialog: six linear steps collecting one listing, sent
    as a single create-listing request from the last step.
    """

    def __init__(
        self,
        client,
        notifier,
        on_refresh: Optional[Callable[[], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
    ):
        self.client = client
        self.notifier = notifier
        self.on_refresh = on_refresh
        self.on_close = on_close
        self.is_open = False
        self.is_loading = False
        self._reset()

    def _reset(self) -> None:
        self.step = Step.CATEGORY
        self.fields: Dict[str, Any] = dict(DEFAULT_FIELDS)
        self.dirty: Set[str] = set()
        self.touched: Set[str] = set()
        self.errors: Dict[str, str] = {}

    # --- dialog ---

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False
        self._reset()
        if self.on_close is not None:
            self.on_close()

    # --- labels ---

    @property
    def action_label(self) -> str:
        if self.step == Step.PRICE:
            return "Create"
        return "Next"

    @property
    def secondary_action_label(self) -> Optional[str]:
        if self.step == Step.CATEGORY:
            return None
        return "Back"

    # --- fields ---

    def set_field(self, name: str, value: Any) -> None:
        if name not in DEFAULT_FIELDS:
            raise KeyError(name)
        self.fields[name] = value
        self.dirty.add(name)
        self.touched.add(name)
        self.validate_field(name)

    def validate_field(self, name: str) -> bool:
        error = _validate(name, self.fields[name])
        if error:
            self.errors[name] = error
            return False
        self.errors.pop(name, None)
        return True

    def validate_step(self) -> bool:
        # only what is on screen gets checked
        results = [self.validate_field(name) for name in STEP_FIELDS[self.step]]
        return all(results)

    # --- transitions ---

    def advance(self) -> Step:
        if self.step < Step.PRICE:
            self.step = Step(self.step + 1)
        return self.step

    def retreat(self) -> Step:
        if self.step > Step.CATEGORY:
            self.step = Step(self.step - 1)
        return self.step

    def submit(self) -> Optional[Dict[str, Any]]:
        """
        Primary button. Moves to the next step, or creates the listing when
        already on the price step.
        """
        if not self.validate_step():
            return None
        if self.step != Step.PRICE:
            self.advance()
            return None
        return self.create()

    def create(self) -> Optional[Dict[str, Any]]:
        if self.step != Step.PRICE:
            raise WizardStateError(f"Cannot create a listing from step {self.step.name}")
        if self.is_loading:
            raise WizardStateError("A create request is already in flight")

        self.is_loading = True
        try:
            listing = self.client.create_listing(dict(self.fields))
        except ApiError as e:
            logger.warning(f"Create listing failed: {e}")
            self.notifier.error("Something went wrong.")
            return None
        finally:
            self.is_loading = False

        self.notifier.success("Listing created!")
        if self.on_refresh is not None:
            self.on_refresh()
        self.close()
        return listing
