from sqlalchemy import Integer, Float, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class SinglesGame(Base):
    __tablename__ = "singles_games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    match_id: Mapped[int] = mapped_column(Integer, ForeignKey("matches.id"), index=True)
    home_player_id: Mapped[int] = mapped_column(Integer, ForeignKey("players.id"))
    away_player_id: Mapped[int] = mapped_column(Integer, ForeignKey("players.id"))
    home_score: Mapped[int | None] = mapped_column(Integer)
    away_score: Mapped[int | None] = mapped_column(Integer)
    home_average: Mapped[float | None] = mapped_column(Float)
    away_average: Mapped[float | None] = mapped_column(Float)
    home_checkouts: Mapped[str | None] = mapped_column(Text)  # "16, 24"
    away_checkouts: Mapped[str | None] = mapped_column(Text)
    game_order: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    match: Mapped["Match"] = relationship("Match", back_populates="singles_games")
    home_player: Mapped["Player"] = relationship("Player", foreign_keys=[home_player_id])
    away_player: Mapped["Player"] = relationship("Player", foreign_keys=[away_player_id])
