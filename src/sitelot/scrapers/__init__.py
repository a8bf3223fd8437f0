"""
Scrapers Package

HTTP clients for the geocoding and planning layer services.
"""

from .geocoder import NominatimGeocoder
from .planning_layers import PlanningLayerScraper

__all__ = [
    "NominatimGeocoder",
    "PlanningLayerScraper",
]
