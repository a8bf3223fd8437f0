"""
Transformers Package

Normalization of raw planning layer attributes.
"""
from src.sitelot.transformers.zoning_normalizer import normalize_zoning, NORMALIZATION_RULES

__all__ = ["normalize_zoning", "NORMALIZATION_RULES"]
