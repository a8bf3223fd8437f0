"""
Planning Layer Scraper

Fetches planning-control attributes at a point from the NSW EPI Primary
Planning Layers ArcGIS MapServer. Four layers are queried concurrently:
zoning, height of buildings, floor space ratio and minimum lot size.
"""
import json
import requests
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, Optional

from config.settings import settings
from src.sitelot.exceptions import UpstreamServiceError
from src.sitelot.models.zoning import LayerAttributes
from src.sitelot.utils.logger import get_logger

logger = get_logger(__name__)


class PlanningLayerScraper:
    """
    Point-intersection queries against the planning MapServer.

    The fan-out is all-or-nothing: the first layer that fails aborts the
    fetch and its status is surfaced.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        layer_ids: Optional[Dict[str, int]] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the scraper.

        Args:
            base_url: Override the MapServer URL (for testing)
            layer_ids: Mapping of layer name (zoning, height, fsr, lot_size) to layer ID
            session: Shared HTTP session, created if not given
            timeout: Request timeout in seconds
        """
        self.base_url = (base_url or settings.epi_base_url).rstrip("/")
        self.layer_ids = layer_ids or {
            "zoning": settings.layer_zoning_id,
            "height": settings.layer_height_id,
            "fsr": settings.layer_fsr_id,
            "lot_size": settings.layer_lot_size_id,
        }
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.headers = {"User-Agent": settings.http_user_agent}

    def query_layer(
        self,
        layer_id: int,
        lat: float,
        lon: float,
        get: Optional[Callable[..., requests.Response]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Query one layer for the feature intersecting a point.

        Args:
            layer_id: MapServer layer ID
            lat: WGS84 latitude
            lon: WGS84 longitude
            get: HTTP GET callable, defaults to the scraper's session

        Returns:
            Attributes of the first intersecting feature, or None

        Raises:
            UpstreamServiceError: Layer answered with a non-success status
        """
        params = {
            "f": "json",
            "geometry": json.dumps({"x": lon, "y": lat}),
            "geometryType": "esriGeometryPoint",
            "inSR": "4326",
            "spatialRel": "esriSpatialRelIntersects",
            "outFields": "*",
        }

        get = get or self.session.get
        response = get(
            f"{self.base_url}/{layer_id}/query",
            params=params,
            headers=self.headers,
            timeout=self.timeout,
        )

        if not response.ok:
            logger.warning("planning_layer_upstream_error", layer_id=layer_id, status_code=response.status_code)
            raise UpstreamServiceError(
                f"planning_layer:{layer_id}",
                f"ArcGIS {layer_id} query failed ({response.status_code})",
                status_code=response.status_code,
            )

        features = response.json().get("features") or []
        if not features:
            return None
        return features[0].get("attributes")

    def fetch_all(self, lat: float, lon: float) -> LayerAttributes:
        """
        Query every planning layer at a point concurrently.

        Args:
            lat: WGS84 latitude
            lon: WGS84 longitude

        Returns:
            LayerAttributes with one (possibly empty) payload per layer
        """
        logger.info("fetching_planning_layers", lat=lat, lon=lon, layers=list(self.layer_ids))

        results: Dict[str, Optional[Dict[str, Any]]] = {}
        executor = ThreadPoolExecutor(max_workers=len(self.layer_ids))
        try:
            # Workers call requests.get; a Session is never shared across threads
            futures = {
                executor.submit(self.query_layer, layer_id, lat, lon, requests.get): name
                for name, layer_id in self.layer_ids.items()
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        finally:
            # Do not wait on the remaining layers once one has failed
            executor.shutdown(wait=False, cancel_futures=True)

        logger.info(
            "planning_layers_fetched",
            with_features=sorted(name for name, attrs in results.items() if attrs)
        )
        return LayerAttributes(**results)
