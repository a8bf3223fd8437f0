"""
Pydantic Schemas for API Request/Response Models

These schemas define the JSON structure for API endpoints. JSON keys are
camelCase; snake_case names are accepted on input as well.
"""
from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from src.sitelot.transformers.zoning_normalizer import as_finite_float


class ApiModel(BaseModel):
    """Base schema with camelCase aliases and ORM attribute loading."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def coerce_str(value: Any) -> Optional[str]:
    """Trimmed non-empty string, else None."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def coerce_int(value: Any) -> Optional[int]:
    """Integers and integer-like strings; fractional strings are truncated."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and value.strip():
        try:
            return int(value.strip())
        except ValueError:
            number = as_finite_float(value)
            return int(number) if number is not None else None
    return None


def coerce_date(value: Any) -> Optional[date]:
    """ISO date or datetime strings; anything unparseable is None."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


class LotRead(ApiModel):
    """Lot as returned by the API."""
    id: str
    address: str
    council: Optional[str] = None
    zone_code: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    max_height_m: Optional[float] = None
    fsr: Optional[float] = None
    min_lot_size_sqm: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class ProjectRead(ApiModel):
    """Project without its lot."""
    id: str
    site_address: str
    project_type: str
    size_storeys: Optional[int] = None
    budget_band: Optional[str] = None
    target_timeline: Optional[date] = None
    created_at: datetime
    lot_id: Optional[str] = None


class ProjectDetail(ProjectRead):
    """Project with the linked lot, when loaded."""
    lot: Optional[LotRead] = None


class ProjectCreate(ApiModel):
    """
    Create-project request body.

    Every field is coerced leniently; presence of siteAddress and
    projectType is checked by the handler. The legacy form keys name and
    description stand in for siteAddress and projectType.
    """
    site_address: Optional[str] = None
    project_type: Optional[str] = None
    size_storeys: Optional[int] = None
    budget_band: Optional[str] = None
    target_timeline: Optional[date] = None

    @model_validator(mode="before")
    @classmethod
    def apply_legacy_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for field, alias, legacy in (
            ("site_address", "siteAddress", "name"),
            ("project_type", "projectType", "description"),
        ):
            if data.get(alias) is None and data.get(field) is None and legacy in data:
                data[alias] = data[legacy]
        return data

    @field_validator("site_address", "project_type", "budget_band", mode="before")
    @classmethod
    def validate_text(cls, v):
        return coerce_str(v)

    @field_validator("size_storeys", mode="before")
    @classmethod
    def validate_storeys(cls, v):
        return coerce_int(v)

    @field_validator("target_timeline", mode="before")
    @classmethod
    def validate_timeline(cls, v):
        return coerce_date(v)


class LotSyncRequest(ApiModel):
    """Lot sync request body."""
    project_id: Optional[str] = None
    address: Optional[str] = None

    @field_validator("project_id", "address", mode="before")
    @classmethod
    def validate_text(cls, v):
        return coerce_str(v)


class LotSyncResponse(ApiModel):
    """Lot sync result."""
    ok: bool = True
    lot: LotRead
    project_id: str


class HealthCheck(BaseModel):
    """Health check response."""
    status: str
    version: str
    database: str
    timestamp: datetime
