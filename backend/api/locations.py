"""Location API routes (read-only)."""
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_db
from repositories.location_repository import get_location as repo_get_location
from repositories.location_repository import list_locations as repo_list_locations
from schemas.locations import LocationResponse

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get("", response_model=list[LocationResponse])
@router.get("/", response_model=list[LocationResponse], include_in_schema=False)
async def list_locations(db: AsyncSession = Depends(get_db)) -> list[LocationResponse]:
    """List all locations. Also served at /locations/, which the web client requests."""
    locations = await repo_list_locations(db)
    return [LocationResponse.model_validate(loc) for loc in locations]


@router.get("/{location_id}", response_model=LocationResponse)
async def get_location(location_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> LocationResponse:
    """Get one location; 404 if it does not exist."""
    return LocationResponse.model_validate(await repo_get_location(db, location_id))
