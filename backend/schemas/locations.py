"""Pydantic schemas for location API."""
import uuid

from pydantic import BaseModel, ConfigDict


class LocationResponse(BaseModel):
    """Location in API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    prompt: str
