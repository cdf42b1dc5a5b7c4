"""Team model definitions."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from backend.database import Base


class Team(Base):
    """Represents an intramural team. Members point back at it through ``User.team_id``."""
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    sport = Column(String, nullable=False)
    department = Column(String, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    creator = relationship("User", foreign_keys=[created_by])
    members = relationship("User", foreign_keys="User.team_id", back_populates="team")

    @property
    def member_count(self) -> int:
        return len(self.members)
