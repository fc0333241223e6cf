from sqlalchemy import Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class DoublesGame(Base):
    __tablename__ = "doubles_games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    match_id: Mapped[int] = mapped_column(Integer, ForeignKey("matches.id"), index=True)
    home_player1_id: Mapped[int] = mapped_column(Integer, ForeignKey("players.id"))
    home_player2_id: Mapped[int] = mapped_column(Integer, ForeignKey("players.id"))
    away_player1_id: Mapped[int] = mapped_column(Integer, ForeignKey("players.id"))
    away_player2_id: Mapped[int] = mapped_column(Integer, ForeignKey("players.id"))
    home_score: Mapped[int | None] = mapped_column(Integer)
    away_score: Mapped[int | None] = mapped_column(Integer)
    game_order: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    match: Mapped["Match"] = relationship("Match", back_populates="doubles_games")
    home_player1: Mapped["Player"] = relationship("Player", foreign_keys=[home_player1_id])
    home_player2: Mapped["Player"] = relationship("Player", foreign_keys=[home_player2_id])
    away_player1: Mapped["Player"] = relationship("Player", foreign_keys=[away_player1_id])
    away_player2: Mapped["Player"] = relationship("Player", foreign_keys=[away_player2_id])
