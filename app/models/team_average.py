from datetime import datetime
from sqlalchemy import Integer, Float, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.date_helpers import utcnow


class TeamAverage(Base):
    __tablename__ = "team_averages"
    __table_args__ = (
        UniqueConstraint("team_id", "season", name="uq_team_averages_team_season"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    team_id: Mapped[int] = mapped_column(Integer, ForeignKey("teams.id"))
    season: Mapped[str] = mapped_column(String(20), nullable=False)
    average: Mapped[float | None] = mapped_column(Float)
    singles_won: Mapped[int] = mapped_column(Integer, default=0)
    singles_lost: Mapped[int] = mapped_column(Integer, default=0)
    doubles_won: Mapped[int] = mapped_column(Integer, default=0)
    doubles_lost: Mapped[int] = mapped_column(Integer, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    team: Mapped["Team"] = relationship("Team")
