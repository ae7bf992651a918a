import asyncio
from dataclasses import dataclass, field
from typing import Any, Optional

import aiohttp

from lead_scraper.core.config import settings
from lead_scraper.core.exceptions import PlaceValidationFailure
from lead_scraper.utils.logging import setup_logger

logger = setup_logger(__name__)


# =============================================================================
# Place Validator
# =============================================================================


@dataclass
class GeocoderConfig:
    url: str = field(default_factory=lambda: settings.GEOCODER_URL)
    user_agent: str = field(default_factory=lambda: settings.GEOCODER_USER_AGENT)
    timeout_seconds: float = field(default_factory=lambda: settings.GEOCODER_TIMEOUT_SECONDS)
    place_types: frozenset[str] = frozenset({
        "city", "town", "village", "county", "state_district", "state",
    })


class PlaceValidator:
    """
    Confirms that a token names a real place using a Nominatim-style
    geocoding endpoint.

    `is_valid_place` never raises: lookup failures of any kind resolve
    to False so the caller can carry on without a place.
    """

    def __init__(self, config: Optional[GeocoderConfig] = None):
        self.config = config or GeocoderConfig()

    async def is_valid_place(self, token: str) -> bool:
        try:
            places = await self._lookup(token)
        except Exception as e:
            logger.warning(
                "Place validation failed",
                extra={"token": token, "error": str(e) or type(e).__name__},
            )
            return False

        valid = self.has_qualifying_place(places)
        logger.debug(
            "Place validation completed",
            extra={"token": token, "candidates": len(places), "valid": valid},
        )
        return valid

    def has_qualifying_place(self, places: list[dict[str, Any]]) -> bool:
        return any(
            isinstance(place, dict)
            and place.get("name")
            and place.get("addresstype") in self.config.place_types
            for place in places
        )

    async def _lookup(self, token: str) -> list[dict[str, Any]]:
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
        headers = {"User-Agent": self.config.user_agent}
        params = {"q": token, "format": "json"}

        try:
            async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
                async with session.get(self.config.url, params=params) as response:
                    if response.status != 200:
                        raise PlaceValidationFailure(
                            f"Geocoder returned HTTP {response.status}"
                        )
                    data = await response.json(content_type=None)
        except asyncio.TimeoutError as e:
            raise PlaceValidationFailure(
                f"Geocoder timed out after {self.config.timeout_seconds}s"
            ) from e

        if not isinstance(data, list):
            raise PlaceValidationFailure(
                f"Unexpected geocoder payload: {type(data).__name__}"
            )
        return data
