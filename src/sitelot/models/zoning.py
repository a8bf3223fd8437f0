"""
Zoning Data Models

Pydantic models for the address-to-zoning lookup: geocode result, raw
planning layer attributes, the normalized planning controls, and the flat
payload written onto a Lot.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeocodeResult(CamelModel):
    """
    Best geocoder match for a free-text address.

    Attributes:
        address: Provider's canonical display name
        lat: WGS84 latitude
        lon: WGS84 longitude
    """

    address: str = Field(..., description="Canonical display name")
    lat: float = Field(..., description="Latitude")
    lon: float = Field(..., description="Longitude")


class LayerAttributes(CamelModel):
    """Attributes of the first intersecting feature on each planning layer."""

    zoning: Optional[Dict[str, Any]] = None
    height: Optional[Dict[str, Any]] = None
    fsr: Optional[Dict[str, Any]] = None
    lot_size: Optional[Dict[str, Any]] = None


class ZoneInfo(CamelModel):
    code: Optional[str] = None
    name: Optional[str] = None


class PlanningControls(CamelModel):
    max_height_m: Optional[float] = None
    fsr: Optional[float] = None
    min_lot_size_sqm: Optional[float] = None


class NormalizedZoning(CamelModel):
    """Canonical planning controls reconciled from the four layers."""

    council: Optional[str] = None
    zone: ZoneInfo = Field(default_factory=ZoneInfo)
    controls: PlanningControls = Field(default_factory=PlanningControls)


class LookupResult(LayerAttributes):
    """Full lookup response: geocode, raw layer payloads and normalized summary."""

    geocode: GeocodeResult
    normalized: NormalizedZoning


class ZoningPayload(BaseModel):
    """
    Lot field values produced by a zoning fetch.

    Keys match the Lot model columns so the payload can be written directly.
    """

    council: Optional[str] = None
    zone_code: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    max_height_m: Optional[float] = None
    fsr: Optional[float] = None
    min_lot_size_sqm: Optional[int] = None

    @classmethod
    def from_lookup(cls, result: LookupResult) -> "ZoningPayload":
        """Flatten a lookup result into lot fields."""
        controls = result.normalized.controls
        min_lot_size = controls.min_lot_size_sqm
        return cls(
            council=result.normalized.council,
            zone_code=result.normalized.zone.code,
            lat=result.geocode.lat,
            lng=result.geocode.lon,
            max_height_m=controls.max_height_m,
            fsr=controls.fsr,
            min_lot_size_sqm=int(round(min_lot_size)) if min_lot_size is not None else None,
        )
