"""
Pipeline Exceptions

Raised by the enrichment pipeline and translated to HTTP errors at the API boundary.
"""
from typing import Optional


class UpstreamServiceError(Exception):
    """An outbound HTTP dependency answered with a non-success status."""

    def __init__(self, service: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.service = service
        self.message = message
        self.status_code = status_code


class GeocodeNotFoundError(Exception):
    """The geocoder returned no result for an address."""

    def __init__(self, address: str):
        super().__init__("No geocode result for that address")
        self.address = address


class ProjectNotFoundError(Exception):
    """A lot sync referenced a project id that does not exist."""

    def __init__(self, project_id: str):
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id
