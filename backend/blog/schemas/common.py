"""
Blog Backend — Shared Response Schemas
=======================================

Error bodies, the API index document and the health check.
"""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """
    What:  Body of every error response.
    Example: {"message": "Not found"}
    """
    message: str = Field(description="Fixed, human-readable error message")


class IndexResponse(BaseModel):
    """Entry point of the API: where the two collections live."""
    posts: str = Field(description="Absolute URI of the posts collection")
    categories: str = Field(description="Absolute URI of the categories collection")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


# Advertised by both collection envelopes
RESOURCE_METHODS = ["GET", "POST", "PATCH", "DELETE"]
