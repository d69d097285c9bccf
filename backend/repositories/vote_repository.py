"""Vote repository: insert-only."""
import uuid

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.vote import Vote
from repositories import query_errors
from schemas.votes import VoteCreate


def _needs_client_id(session: AsyncSession) -> bool:
    # SQLite has no UUID generator; PostgreSQL fills the column default.
    return session.get_bind().dialect.name != "postgresql"


async def add_vote(session: AsyncSession, vote: VoteCreate, user_agent: str) -> None:
    """Insert one vote and commit. Every call creates a new row; id and created_at come from storage."""
    values = {
        "location_id": vote.location_id,
        "agrees": vote.agrees,
        "comment": vote.comment,
        "user_agent": user_agent,
    }
    if _needs_client_id(session):
        values["id"] = uuid.uuid4()
    try:
        with query_errors("add vote"):
            await session.execute(insert(Vote).values(**values))
            await session.commit()
    except Exception:
        await session.rollback()
        raise


async def count_votes(session: AsyncSession, location_id: uuid.UUID) -> int:
    """Return the number of votes for a location."""
    with query_errors("count votes"):
        result = await session.execute(
            select(func.count()).select_from(Vote).where(Vote.location_id == location_id)
        )
        return result.scalar() or 0
