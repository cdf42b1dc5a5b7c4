"""Event model definitions."""

from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from backend.database import Base


class Event(Base):
    """Represents a scheduled sports event, optionally a match between two teams."""
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    sport = Column(String, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    event_type = Column(String, nullable=True)
    location = Column(String, nullable=True)
    status = Column(String, nullable=True)
    team1_id = Column(Integer, ForeignKey("teams.id"), nullable=True)
    team2_id = Column(Integer, ForeignKey("teams.id"), nullable=True)
    team1_score = Column(Integer, nullable=True)
    team2_score = Column(Integer, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    creator = relationship("User", foreign_keys=[created_by])
    team1 = relationship("Team", foreign_keys=[team1_id])
    team2 = relationship("Team", foreign_keys=[team2_id])
    participants = relationship("EventParticipant", back_populates="event")
