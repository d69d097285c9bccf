"""Vote API routes."""
from fastapi import APIRouter, Depends, Header, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_db
from repositories.vote_repository import add_vote as repo_add_vote
from schemas.votes import VoteCreate

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("", status_code=status.HTTP_200_OK, response_class=Response)
async def add_vote(
    body: VoteCreate,
    user_agent: str = Header(),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Record a vote for a location. Responds with an empty body."""
    await repo_add_vote(db, body, user_agent)
    return Response(status_code=status.HTTP_200_OK)
