from datetime import datetime
from sqlalchemy import Integer, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.date_helpers import utcnow


class Player(Base):
    __tablename__ = "players"
    __table_args__ = (
        UniqueConstraint("name", "team_id", "season", name="uq_players_name_team_season"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    team_id: Mapped[int] = mapped_column(Integer, ForeignKey("teams.id"), index=True)
    season: Mapped[str] = mapped_column(String(20), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    team: Mapped["Team"] = relationship("Team", back_populates="players")
    statistics: Mapped["PlayerStatistic"] = relationship(
        "PlayerStatistic", back_populates="player", uselist=False
    )
