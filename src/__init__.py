"""
Site Lot - Core Package

Construction project tracking with address-to-zoning enrichment: geocoding,
planning layer lookup, normalization and lot persistence.
"""

__version__ = "0.1.0"
