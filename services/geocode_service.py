"""
Geocoding service backed by the Mapbox Geocoding API.
Transient upstream failures are retried with exponential back-off.
"""
import logging
from typing import List, Optional
from urllib.parse import quote

import httpx
from tenacity import AsyncRetrying, retry_if_exception, stop_after_attempt, wait_exponential

from core.config import settings
from schemas.location import LocationResult


logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """Raised when the geocoding provider cannot answer a query."""


class GeocoderNotConfiguredError(GeocodingError):
    """Raised when no Mapbox access token is configured."""


def _is_transient(exc: BaseException) -> bool:
    """Network errors, rate limiting and 5xx responses are worth retrying."""
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
        return status_code == 429 or status_code >= 500
    return False


def feature_to_location(feature: dict) -> LocationResult:
    """Reshape a Mapbox GeoJSON feature into a LocationResult."""
    place_type = feature.get("place_type") or [None]
    return LocationResult(
        id=str(feature.get("id")),
        name=feature.get("place_name") or feature.get("text") or "",
        coordinates=feature.get("center") or [],
        type=place_type[0],
        bbox=feature.get("bbox")
    )


class MapboxGeocoder:
    """Thin async client for forward geocoding of place names."""

    def __init__(
        self,
        token: str,
        base_url: str = settings.MAPBOX_GEOCODING_URL,
        timeout: float = settings.GEOCODE_TIMEOUT,
        limit: int = settings.GEOCODE_LIMIT,
        types: str = settings.GEOCODE_TYPES,
        max_retries: int = settings.GEOCODE_MAX_RETRIES,
        retry_wait_min: float = 1.0,
        retry_wait_max: float = 8.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.limit = limit
        self.types = types
        self.max_retries = max(0, max_retries)
        self.retry_wait_min = retry_wait_min
        self.retry_wait_max = retry_wait_max
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.token and self.token.strip())

    def _build_request(self, query: str) -> tuple:
        url = f"{self.base_url}/{quote(query, safe='')}.json"
        params = {
            "access_token": self.token,
            "types": self.types,
            "limit": self.limit
        }
        return url, params

    async def geocode(self, query: str) -> dict:
        """
        Forward-geocode a free-text place name.

        Args:
            query: Place name typed by the user

        Returns:
            Raw Mapbox FeatureCollection

        Raises:
            GeocoderNotConfiguredError: If no token is configured
            GeocodingError: If the provider fails after retries
        """
        if not self.is_configured:
            raise GeocoderNotConfiguredError("Mapbox token not configured")

        url, params = self._build_request(query)
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(min=self.retry_wait_min, max=self.retry_wait_max),
            retry=retry_if_exception(_is_transient),
            reraise=True
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                async for attempt in retrying:
                    with attempt:
                        response = await client.get(url, params=params)
                        response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Mapbox geocoding for %r failed with HTTP %s", query, e.response.status_code)
            raise GeocodingError(f"Mapbox API error: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("Mapbox geocoding for %r failed: %s", query, e)
            raise GeocodingError(f"Mapbox API unreachable: {e}") from e
        except ValueError as e:
            logger.error("Mapbox returned invalid JSON for %r", query)
            raise GeocodingError("Mapbox API returned invalid JSON") from e

    async def search_locations(self, query: str) -> List[LocationResult]:
        """Geocode and reshape the features into LocationResult items."""
        data = await self.geocode(query)
        return [feature_to_location(feature) for feature in data.get("features", [])]


def get_geocoder() -> MapboxGeocoder:
    """FastAPI dependency returning a geocoder configured from settings."""
    return MapboxGeocoder(token=settings.MAPBOX_TOKEN)
