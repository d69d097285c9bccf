"""Vote model: one row per submitted vote."""
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, FetchedValue, ForeignKey, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from models import Base


class Vote(Base):
    """votes table: id, user_agent, agrees, comment, location_id, created_at."""

    __tablename__ = "votes"

    # Filled by gen_random_uuid() on PostgreSQL (see the create migration).
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, server_default=FetchedValue())
    user_agent: Mapped[str] = mapped_column(Text, nullable=False)
    agrees: Mapped[bool] = mapped_column(Boolean, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("locations.id"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
