"""
Lookup Endpoint Client

Fetches zoning for an address by calling the application's own
/api/lep/lookup endpoint over HTTP.
"""
from typing import Optional

import requests

from config.settings import settings
from src.sitelot.exceptions import UpstreamServiceError
from src.sitelot.models.zoning import LookupResult, ZoningPayload
from src.sitelot.utils.logger import get_logger

logger = get_logger(__name__)

LOOKUP_PATH = "/api/lep/lookup"


class LookupEndpointClient:
    """Server-to-self client for the zoning lookup endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or settings.app_base_url).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds

    def lookup(self, address: str) -> LookupResult:
        """
        Call the lookup endpoint for an address.

        Raises:
            UpstreamServiceError: Endpoint answered with a non-success status
        """
        response = self.session.get(
            f"{self.base_url}{LOOKUP_PATH}",
            params={"address": address},
            headers={"User-Agent": f"{settings.http_user_agent} (lots-sync)"},
            timeout=self.timeout,
        )

        if not response.ok:
            body = response.text or ""
            logger.warning("lookup_endpoint_error", address=address, status_code=response.status_code)
            raise UpstreamServiceError(
                "lookup",
                f"LEP lookup failed ({response.status_code}) {body}".strip(),
                status_code=response.status_code,
            )

        return LookupResult.model_validate(response.json())

    def fetch_zoning(self, address: str) -> ZoningPayload:
        """Lot field values for an address, via the lookup endpoint."""
        return ZoningPayload.from_lookup(self.lookup(address))
