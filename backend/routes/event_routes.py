from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from backend.auth.dependencies import Caller, admin_only
from backend.repositories.events import EventRepository
from backend.routes.resource import RoleGatedResource
from backend.schemas import EventResponse, OptionalText, RequiredText, to_local_naive


class EventFields(BaseModel):
    description: OptionalText = None
    event_type: OptionalText = Field(default=None, alias='type')
    location: OptionalText = None
    status: OptionalText = None
    team1_id: int | None = Field(default=None, alias='team1Id')
    team2_id: int | None = Field(default=None, alias='team2Id')
    team1_score: int | None = Field(default=None, alias='team1Score', ge=0)
    team2_score: int | None = Field(default=None, alias='team2Score', ge=0)

    class Config:
        populate_by_name = True

    @field_validator('date', check_fields=False)
    @classmethod
    def normalize_date(cls, value: datetime | None) -> datetime | None:
        return to_local_naive(value)


class CreateEventRequest(EventFields):
    title: RequiredText
    sport: RequiredText
    date: datetime


class UpdateEventRequest(EventFields):
    id: int
    title: RequiredText | None = None
    sport: RequiredText | None = None
    date: datetime | None = None


class EventResource(RoleGatedResource):
    label = 'Event'
    repository_class = EventRepository

    def list_records(self, repository: EventRepository, caller: Caller):
        return repository.list_all()

    def create_fields(self, data: CreateEventRequest, caller: Caller) -> dict:
        return {**data.model_dump(), 'created_by': caller.id}


events = EventResource(
    gate=admin_only,
    response_model=EventResponse,
    create_model=CreateEventRequest,
    update_model=UpdateEventRequest,
)

router = events.build_router(tags=['events'])
