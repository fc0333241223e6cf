from sqlalchemy import Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class ClubVenue(Base):
    __tablename__ = "club_venues"
    __table_args__ = (
        UniqueConstraint("team_id", name="uq_club_venues_team"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    team_id: Mapped[int] = mapped_column(Integer, ForeignKey("teams.id"))
    name: Mapped[str | None] = mapped_column(String(255))
    address: Mapped[str | None] = mapped_column(String(500))
    phone: Mapped[str | None] = mapped_column(String(50))
    zipcode: Mapped[str | None] = mapped_column(String(20))

    # Relationships
    team: Mapped["Team"] = relationship("Team", back_populates="venue")
