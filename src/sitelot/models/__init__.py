"""
Data Models

Pydantic models for geocoding and planning layer lookups.
"""
