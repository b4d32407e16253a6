# app/services/geocoding_service.py
"""Address geocoding through the Google Geocoding HTTP API"""
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional
import logging

import requests

from app.core.config import settings
from app.core.errors import UnavailableError

logger = logging.getLogger(__name__)

MEMO_SIZE = 1024


@dataclass
class GeoLocation:
    latitude: float
    longitude: float
    formatted_address: str


class GeocodingService:
    """Resolve free-text addresses to coordinates. Recent successful lookups are memoised."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
        memo_size: int = MEMO_SIZE,
    ):
        self.api_key = api_key if api_key is not None else settings.GEOCODING_API_KEY
        self.url = url or settings.GEOCODING_URL
        self.timeout = timeout or settings.GEOCODING_TIMEOUT
        self.session = session or requests.Session()
        self.memo_size = memo_size
        self._memo: "OrderedDict[str, GeoLocation]" = OrderedDict()

        if not self.api_key:
            logger.warning("Geocoding API key not configured; location lookups are disabled")

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def geocode(self, address: str) -> Optional[GeoLocation]:
        """
        Look up an address.

        Returns:
            GeoLocation, or None when geocoding is disabled or the address is unknown

        Raises:
            UnavailableError: the API timed out, refused the connection, failed or
                replied with a payload that cannot be read
        """
        if not self.enabled:
            return None

        key = address.strip().lower()
        if key in self._memo:
            self._memo.move_to_end(key)
            return self._memo[key]

        try:
            response = self.session.get(
                self.url,
                params={"address": address, "key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.Timeout, requests.ConnectionError) as e:
            raise UnavailableError(f"Geocoding service unreachable: {e}")
        except (requests.RequestException, ValueError) as e:
            raise UnavailableError(f"Geocoding request failed: {e}")

        if not isinstance(payload, dict):
            raise UnavailableError(f"Malformed geocoding response for '{address}'")
        results = payload.get("results") or []
        if payload.get("status") not in (None, "OK") or not results:
            logger.info(f"No geocoding result for address '{address}' ({payload.get('status')})")
            return None

        try:
            first = results[0]
            location = first["geometry"]["location"]
            geo = GeoLocation(
                latitude=float(location["lat"]),
                longitude=float(location["lng"]),
                formatted_address=first.get("formatted_address", address),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise UnavailableError(f"Malformed geocoding response for '{address}': {e!r}")

        self._memo[key] = geo
        if len(self._memo) > self.memo_size:
            self._memo.popitem(last=False)
        return geo


_geocoding_service: Optional[GeocodingService] = None


def get_geocoding_service() -> GeocodingService:
    """Get or create the geocoding service singleton"""
    global _geocoding_service
    if _geocoding_service is None:
        _geocoding_service = GeocodingService()
    return _geocoding_service
