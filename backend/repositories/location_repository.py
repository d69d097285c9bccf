"""Location repository: list, get, create."""
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from errors import NotFound
from models.location import Location
from repositories import query_errors


async def list_locations(session: AsyncSession) -> list[Location]:
    """Return all locations in storage order."""
    with query_errors("list locations"):
        result = await session.execute(select(Location))
        return list(result.scalars().all())


async def get_location(session: AsyncSession, location_id: uuid.UUID) -> Location:
    """Return a location by id. Raises NotFound when no row matches."""
    with query_errors("get location"):
        loc = await session.get(Location, location_id)
    if loc is None:
        raise NotFound(f"Location {location_id} not found")
    return loc


async def create_location(
    session: AsyncSession, title: str, prompt: str, location_id: uuid.UUID | None = None
) -> Location:
    """Create a location, commit, and return it. Locations are normally managed outside the service."""
    loc = Location(id=location_id or uuid.uuid4(), title=title, prompt=prompt)
    session.add(loc)
    try:
        with query_errors("create location"):
            await session.commit()
    except Exception:
        await session.rollback()
        raise
    return loc


async def count_locations(session: AsyncSession) -> int:
    """Return the number of locations."""
    with query_errors("count locations"):
        result = await session.execute(select(func.count()).select_from(Location))
        return result.scalar() or 0
