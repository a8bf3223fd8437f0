"""
Zoning Attribute Normalizer

Reconciles the planning layer payloads into one canonical set of planning
controls. Each canonical attribute declares an ordered list of
(field name, coercer) candidates on one layer; the first present value wins
and is coerced. Candidate order is the tie-break and must be kept as is to
reproduce outputs for real provider data.
"""
import math
import numbers
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from src.sitelot.models.zoning import LayerAttributes, NormalizedZoning, PlanningControls, ZoneInfo

NUMBER_TOKEN = re.compile(r"\d+(?:\.\d+)?|\.\d+")


def as_text(value: Any) -> Optional[str]:
    """Stringify and strip; blank becomes None."""
    text = str(value).strip()
    return text or None


def as_finite_float(value: Any) -> Optional[float]:
    """Coerce numbers and numeric strings to float; anything non-finite is None."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def as_ratio(value: Any) -> Optional[float]:
    """
    Coerce a floor space ratio.

    Numbers are used directly. Text keeps only digits and decimal points and
    the first number is taken, so "0.5:1" gives 0.5 and "FSR 1.3" gives 1.3.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Number):
        return as_finite_float(value)
    if isinstance(value, str):
        match = NUMBER_TOKEN.search(value)
        return as_finite_float(match.group()) if match else None
    return None


Candidate = Tuple[str, Callable[[Any], Any]]


@dataclass(frozen=True)
class AttributeRule:
    """Ordered candidate fields for one canonical attribute on one layer."""

    layer: str
    candidates: Tuple[Candidate, ...]


NORMALIZATION_RULES: Dict[str, AttributeRule] = {
    "zone_code": AttributeRule("zoning", (
        ("ZONE_CODE", as_text),
        ("SYM_CODE", as_text),
    )),
    "zone_name": AttributeRule("zoning", (
        ("ZONE_NAME", as_text),
        ("MAP_NAME", as_text),
    )),
    "council": AttributeRule("zoning", (
        ("LGA_NAME", as_text),
    )),
    "max_height_m": AttributeRule("height", (
        ("MAX_B_H_M", as_finite_float),
        ("HOB_M", as_finite_float),
        ("MAX_B_H", as_finite_float),
    )),
    "fsr": AttributeRule("fsr", (
        ("FSR_VALUE", as_ratio),
        ("FSR", as_ratio),
        ("SYM_CODE", as_ratio),
        ("LAY_CLASS", as_ratio),
    )),
    "min_lot_size_sqm": AttributeRule("lot_size", (
        ("LOTSIZE_MIN", as_finite_float),
    )),
}


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def _layer_payload(layers: LayerAttributes, layer: str) -> Dict[str, Any]:
    payload = getattr(layers, layer, None)
    return payload if isinstance(payload, dict) else {}


def resolve_attribute(rule: AttributeRule, layers: LayerAttributes) -> Any:
    """
    Evaluate one rule: coerce the first present candidate value.

    A value that fails coercion yields None; later candidates are not tried.
    """
    payload = _layer_payload(layers, rule.layer)
    for field, coerce in rule.candidates:
        value = payload.get(field)
        if _is_present(value):
            return coerce(value)
    return None


def normalize_zoning(layers: LayerAttributes) -> NormalizedZoning:
    """
    Produce canonical planning controls from raw layer payloads.

    Pure and total: missing or malformed fields become None. Values are not
    range checked.

    Args:
        layers: Raw attributes per planning layer

    Returns:
        NormalizedZoning summary
    """
    values = {name: resolve_attribute(rule, layers) for name, rule in NORMALIZATION_RULES.items()}

    return NormalizedZoning(
        council=values["council"],
        zone=ZoneInfo(code=values["zone_code"], name=values["zone_name"]),
        controls=PlanningControls(
            max_height_m=values["max_height_m"],
            fsr=values["fsr"],
            min_lot_size_sqm=values["min_lot_size_sqm"],
        ),
    )
