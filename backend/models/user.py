"""User model definitions."""

import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from backend.database import Base


class Role(str, enum.Enum):
    ADMIN = 'ADMIN'
    STUDENT = 'STUDENT'


class User(Base):
    """Represents a portal user, either an administrator or a student."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False, default="")
    role = Column(String, nullable=False, default=Role.STUDENT.value)
    student_id = Column(String, nullable=True)
    # users and teams reference each other, so this key is created after both tables.
    team_id = Column(
        Integer,
        ForeignKey("teams.id", use_alter=True, name="fk_users_team_id"),
        nullable=True,
        index=True,
    )
    created_at = Column(DateTime, default=datetime.now, nullable=False)

    team = relationship("Team", foreign_keys=[team_id], back_populates="members")
