"""Response and request pieces shared by several routers.

Responses are read straight from ORM rows and use camelCase names on the
wire. None of them carries ``hashed_password``.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, field_validator

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalText = Annotated[str, StringConstraints(strip_whitespace=True)] | None


def to_local_naive(value: datetime | None) -> datetime | None:
    # Stored datetimes are naive local time, like datetime.now().
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class TeamRef(BaseModel):
    id: int
    name: str
    sport: str

    class Config:
        from_attributes = True


class TeamName(BaseModel):
    name: str

    class Config:
        from_attributes = True


class CreatorResponse(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class AuthorResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str
    team: TeamName | None = None

    class Config:
        from_attributes = True


class UserSummaryResponse(BaseModel):
    id: int
    name: str
    email: str
    student_id: str | None = Field(default=None, serialization_alias='studentID')
    team_id: int | None = Field(default=None, serialization_alias='teamID')

    class Config:
        from_attributes = True


class TeamMemberResponse(BaseModel):
    id: int
    name: str
    email: str
    student_id: str | None = Field(default=None, serialization_alias='studentID')

    class Config:
        from_attributes = True


class TeamResponse(BaseModel):
    id: int
    name: str
    sport: str
    department: str | None = None
    created_by: int = Field(serialization_alias='createdBy')
    created_at: datetime = Field(serialization_alias='createdAt')
    creator: CreatorResponse | None = None
    members: list[TeamMemberResponse] = []
    member_count: int = Field(default=0, serialization_alias='memberCount')

    class Config:
        from_attributes = True


class PostResponse(BaseModel):
    id: int
    content: str
    image_url: str | None = Field(default=None, serialization_alias='imageURL')
    user_id: int = Field(serialization_alias='userID')
    created_at: datetime = Field(serialization_alias='createdAt')
    updated_at: datetime | None = Field(default=None, serialization_alias='updatedAt')
    author: AuthorResponse | None = Field(default=None, serialization_alias='user')

    class Config:
        from_attributes = True


class EventResponse(BaseModel):
    id: int
    title: str
    description: str | None = None
    sport: str
    date: datetime
    event_type: str | None = Field(default=None, serialization_alias='type')
    location: str | None = None
    status: str | None = None
    team1_id: int | None = Field(default=None, serialization_alias='team1Id')
    team2_id: int | None = Field(default=None, serialization_alias='team2Id')
    team1_score: int | None = Field(default=None, serialization_alias='team1Score')
    team2_score: int | None = Field(default=None, serialization_alias='team2Score')
    created_by: int = Field(serialization_alias='createdBy')
    created_at: datetime = Field(serialization_alias='createdAt')
    creator: CreatorResponse | None = None

    class Config:
        from_attributes = True


class ParticipationResponse(BaseModel):
    id: int
    event_id: int = Field(serialization_alias='eventId')
    user_id: int = Field(serialization_alias='userId')
    joined_at: datetime = Field(serialization_alias='joinedAt')

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str


class PostContentRequest(BaseModel):
    content: RequiredText
    image_url: OptionalText = Field(default=None, alias='imageURL')

    class Config:
        populate_by_name = True

    @field_validator('image_url')
    @classmethod
    def blank_image_url_is_none(cls, value: str | None) -> str | None:
        return value or None


class PostUpdateRequest(BaseModel):
    id: int
    content: RequiredText | None = None
    image_url: OptionalText = Field(default=None, alias='imageURL')

    class Config:
        populate_by_name = True

    @field_validator('image_url')
    @classmethod
    def blank_image_url_is_none(cls, value: str | None) -> str | None:
        return value or None
