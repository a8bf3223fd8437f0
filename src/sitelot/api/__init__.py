"""
FastAPI REST API for the Site Lot project tracker

Provides REST endpoints for:
- Project creation (with lot enrichment) and listing
- Address to zoning lookup
- Lot sync for an existing project
- Health checks
"""
