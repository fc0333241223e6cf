from sqlalchemy import Integer, String, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class HighFinish(Base):
    __tablename__ = "high_finishes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(Integer, ForeignKey("players.id"), index=True)
    team_id: Mapped[int] = mapped_column(Integer, ForeignKey("teams.id"))
    season: Mapped[str] = mapped_column(String(20), nullable=False)
    finish: Mapped[int] = mapped_column(Integer, nullable=False)
    count: Mapped[int] = mapped_column(Integer, default=1)

    # Relationships
    player: Mapped["Player"] = relationship("Player")
    team: Mapped["Team"] = relationship("Team")
