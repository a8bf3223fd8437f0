"""
Address Geocoder

Resolves a free-text address to a single best-match coordinate using the
OpenStreetMap Nominatim search API.
"""
import requests
from typing import Optional

from config.settings import settings
from src.sitelot.exceptions import UpstreamServiceError
from src.sitelot.models.zoning import GeocodeResult
from src.sitelot.utils.logger import get_logger

logger = get_logger(__name__)


class NominatimGeocoder:
    """
    Geocoder backed by Nominatim.

    Requests one JSON result with address details. No retries; the timeout
    comes from settings and defaults to none.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the geocoder.

        Args:
            base_url: Override the default search URL (for testing)
            session: Shared HTTP session, created if not given
            timeout: Request timeout in seconds
        """
        self.base_url = base_url or settings.nominatim_url
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.headers = {"User-Agent": settings.http_user_agent}

    def geocode(self, address: str) -> Optional[GeocodeResult]:
        """
        Look up the best match for an address.

        Args:
            address: Free-text address

        Returns:
            GeocodeResult, or None when the provider has no match

        Raises:
            UpstreamServiceError: Provider answered with a non-success status
            requests.RequestException: Network failure
        """
        params = {
            "q": address,
            "format": "json",
            "addressdetails": "1",
            "limit": "1",
        }

        try:
            response = self.session.get(
                self.base_url,
                params=params,
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(
                "geocode_request_failed",
                address=address,
                error=str(e),
                error_type=type(e).__name__
            )
            raise

        if not response.ok:
            logger.warning("geocode_upstream_error", address=address, status_code=response.status_code)
            raise UpstreamServiceError(
                "geocoder",
                f"Geocode failed ({response.status_code})",
                status_code=response.status_code,
            )

        results = response.json()
        if not results:
            logger.info("geocode_no_result", address=address)
            return None

        best = results[0]
        result = GeocodeResult(
            address=best.get("display_name") or address,
            lat=float(best["lat"]),
            lon=float(best["lon"]),
        )
        logger.info("geocode_resolved", address=address, lat=result.lat, lon=result.lon)
        return result
