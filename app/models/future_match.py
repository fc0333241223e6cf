import datetime
from sqlalchemy import Integer, String, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class FutureMatch(Base):
    __tablename__ = "future_schedule"
    __table_args__ = (
        UniqueConstraint(
            "round", "home_team_id", "away_team_id", "season",
            name="uq_future_schedule_round_home_away_season",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    round: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[datetime.date | None] = mapped_column(Date)
    home_team_id: Mapped[int] = mapped_column(Integer, ForeignKey("teams.id"))
    away_team_id: Mapped[int] = mapped_column(Integer, ForeignKey("teams.id"))
    season: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    # Relationships
    home_team: Mapped["Team"] = relationship("Team", foreign_keys=[home_team_id])
    away_team: Mapped["Team"] = relationship("Team", foreign_keys=[away_team_id])
