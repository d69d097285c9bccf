"""Pydantic schemas for vote API."""
import uuid

from pydantic import BaseModel, ConfigDict, Field


class VoteCreate(BaseModel):
    """Payload for submitting a vote. Accepts locationId or location_id."""

    model_config = ConfigDict(populate_by_name=True)

    agrees: bool
    comment: str | None = None
    location_id: uuid.UUID = Field(alias="locationId")
