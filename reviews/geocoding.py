import logging
from typing import Any, Dict, List, Optional

import requests
from django.conf import settings

from authentication.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 3
MAX_RESULTS = 5


class AddressLookup:
    """Address search against a Nominatim-compatible endpoint."""

    def __init__(
        self,
        url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.url = url or settings.GEOCODER_URL
        self.user_agent = user_agent or settings.GEOCODER_USER_AGENT
        self.timeout = timeout or settings.GEOCODER_TIMEOUT

    def _request(self, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        headers = {"User-Agent": self.user_agent, "Accept-Language": "en"}
        resp = requests.get(self.url, params=params, headers=headers, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def search(self, query: str) -> List[Dict[str, Any]]:
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []

        try:
            results = self._request({
                "q": query,
                "format": "json",
                "addressdetails": 1,
                "limit": MAX_RESULTS,
            })
            return [
                {
                    "display_name": item.get("display_name", ""),
                    "lat": float(item["lat"]),
                    "lon": float(item["lon"]),
                }
                for item in results[:MAX_RESULTS]
                if "lat" in item and "lon" in item
            ]
        except (requests.RequestException, ValueError, TypeError, AttributeError) as exc:
            logger.error(f"Address lookup failed for {query!r}: {exc}")
            raise UpstreamFailure("Address lookup failed") from exc
