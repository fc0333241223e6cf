from sqlalchemy import Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Match(Base):
    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint(
            "matchday_id", "home_team_id", "away_team_id",
            name="uq_matches_matchday_home_away",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    matchday_id: Mapped[int] = mapped_column(Integer, ForeignKey("matchdays.id"), index=True)
    home_team_id: Mapped[int] = mapped_column(Integer, ForeignKey("teams.id"))
    away_team_id: Mapped[int] = mapped_column(Integer, ForeignKey("teams.id"))
    home_sets: Mapped[int | None] = mapped_column(Integer)
    away_sets: Mapped[int | None] = mapped_column(Integer)
    home_legs: Mapped[int | None] = mapped_column(Integer)
    away_legs: Mapped[int | None] = mapped_column(Integer)
    season: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    # Relationships
    matchday: Mapped["Matchday"] = relationship("Matchday", back_populates="matches")
    home_team: Mapped["Team"] = relationship("Team", foreign_keys=[home_team_id])
    away_team: Mapped["Team"] = relationship("Team", foreign_keys=[away_team_id])
    singles_games: Mapped[list["SinglesGame"]] = relationship(
        "SinglesGame", back_populates="match", order_by="SinglesGame.game_order"
    )
    doubles_games: Mapped[list["DoublesGame"]] = relationship(
        "DoublesGame", back_populates="match", order_by="DoublesGame.game_order"
    )
