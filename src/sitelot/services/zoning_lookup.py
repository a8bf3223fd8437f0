"""
Zoning Lookup Service

Address-to-zoning enrichment: geocode the address, query the planning
layers at that point, and normalize the result.
"""
from typing import Optional

import requests

from src.sitelot.exceptions import GeocodeNotFoundError
from src.sitelot.models.zoning import LookupResult, ZoningPayload
from src.sitelot.scrapers.geocoder import NominatimGeocoder
from src.sitelot.scrapers.planning_layers import PlanningLayerScraper
from src.sitelot.transformers.zoning_normalizer import normalize_zoning
from src.sitelot.utils.logger import get_logger

logger = get_logger(__name__)


class ZoningLookupService:
    """Runs the geocode, layer fetch and normalize steps for one address."""

    def __init__(
        self,
        geocoder: Optional[NominatimGeocoder] = None,
        layer_scraper: Optional[PlanningLayerScraper] = None,
        session: Optional[requests.Session] = None,
    ):
        self.geocoder = geocoder or NominatimGeocoder(session=session)
        self.layer_scraper = layer_scraper or PlanningLayerScraper(session=session)

    def lookup(self, address: str) -> LookupResult:
        """
        Look up planning controls for an address.

        Args:
            address: Free-text address

        Returns:
            LookupResult with geocode, raw layer payloads and normalized summary

        Raises:
            GeocodeNotFoundError: The geocoder had no match; layers are not queried
            UpstreamServiceError: Geocoder or a planning layer failed
        """
        geocode = self.geocoder.geocode(address)
        if geocode is None:
            raise GeocodeNotFoundError(address)

        layers = self.layer_scraper.fetch_all(geocode.lat, geocode.lon)
        normalized = normalize_zoning(layers)

        logger.info(
            "zoning_lookup_complete",
            address=address,
            zone_code=normalized.zone.code,
            council=normalized.council
        )

        return LookupResult(
            geocode=geocode,
            zoning=layers.zoning,
            height=layers.height,
            fsr=layers.fsr,
            lot_size=layers.lot_size,
            normalized=normalized,
        )

    def fetch_zoning(self, address: str) -> ZoningPayload:
        """Lot field values for an address, computed in-process."""
        return ZoningPayload.from_lookup(self.lookup(address))
