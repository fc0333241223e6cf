from datetime import datetime
from sqlalchemy import Integer, Float, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.utils.date_helpers import utcnow


class PlayerStatistic(Base):
    __tablename__ = "player_statistics"
    __table_args__ = (
        UniqueConstraint("player_id", "season", name="uq_player_statistics_player_season"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(Integer, ForeignKey("players.id"))
    season: Mapped[str] = mapped_column(String(20), nullable=False)
    average: Mapped[float | None] = mapped_column(Float)

    # Singles
    singles_won: Mapped[int] = mapped_column(Integer, default=0)
    singles_lost: Mapped[int] = mapped_column(Integer, default=0)
    singles_percentage: Mapped[float | None] = mapped_column(Float)

    # Doubles
    doubles_won: Mapped[int] = mapped_column(Integer, default=0)
    doubles_lost: Mapped[int] = mapped_column(Integer, default=0)
    doubles_percentage: Mapped[float | None] = mapped_column(Float)

    combined_percentage: Mapped[float | None] = mapped_column(Float)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow
    )

    # Relationships
    player: Mapped["Player"] = relationship("Player", back_populates="statistics")
