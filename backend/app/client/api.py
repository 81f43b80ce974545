"""
Thin HTTP client for the marketplace API
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

import requests

from app.core.config import settings
from app.core.errors import ApiError

logger = logging.getLogger(__name__)

__all__ = ["ApiError", "MarketplaceClient"]


class MarketplaceClient:
    """Calls the reservation and listing endpoints on behalf of a user"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        access_token: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.access_token = access_token
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                headers=self._headers(),
                timeout=self.timeout,
                **kwargs,
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"{method} {url} failed with HTTP {status_code}: {e}")
            raise ApiError(str(e), status_code=status_code) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError(str(e)) from e

        if not response.content:
            return None
        return response.json()

    def create_reservation(
        self,
        listing_id: int,
        start_date: date,
        end_date: date,
        total_price: int,
    ) -> Dict[str, Any]:
        logger.info(f"Reserving listing {listing_id} from {start_date} to {end_date}")
        data = self._request(
            "POST",
            "/reservations",
            json={
                "listing_id": listing_id,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "total_price": total_price,
            },
        )
        return data["data"]

    def delete_reservation(self, reservation_id: int) -> int:
        data = self._request("DELETE", f"/reservations/{reservation_id}")
        return int(data["count"])

    def list_reservations(
        self,
        listing_id: Optional[int] = None,
        user_id: Optional[int] = None,
        author_id: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        params = {
            "listing_id": listing_id,
            "user_id": user_id,
            "author_id": author_id,
        }
        data = self._request(
            "GET",
            "/reservations",
            params={k: v for k, v in params.items() if v is not None},
        )
        return data["items"]

    def create_listing(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"Creating listing {fields.get('title')!r}")
        return self._request("POST", "/listings", json=fields)["data"]
