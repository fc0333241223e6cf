import datetime
from sqlalchemy import Integer, String, Date, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Matchday(Base):
    __tablename__ = "matchdays"
    __table_args__ = (
        UniqueConstraint("round", "season", name="uq_matchdays_round_season"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    round: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[datetime.date | None] = mapped_column(Date)
    season: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    # Relationships
    matches: Mapped[list["Match"]] = relationship(
        "Match", back_populates="matchday", order_by="Match.id"
    )
