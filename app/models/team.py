from datetime import datetime
from sqlalchemy import Integer, String, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.date_helpers import utcnow


class Team(Base):
    __tablename__ = "teams"
    # (name, season) is the natural key, but deployed schemas may lack a unique
    # index on it. Team writes go through TeamSyncService.save_team_with_fallback.
    __table_args__ = (
        Index("ix_teams_name_season", "name", "season"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    division: Mapped[str | None] = mapped_column(String(20))
    season: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    players: Mapped[list["Player"]] = relationship("Player", back_populates="team")
    venue: Mapped["ClubVenue"] = relationship(
        "ClubVenue", back_populates="team", uselist=False
    )
