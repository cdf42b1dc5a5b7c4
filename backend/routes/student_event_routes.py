from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from backend.auth.dependencies import Caller, any_member
from backend.database import get_db
from backend.repositories.events import EventRepository
from backend.repositories.participants import ParticipantRepository
from backend.routes.resource import json_body
from backend.schemas import EventResponse, MessageResponse, ParticipationResponse

router = APIRouter(tags=['student-events'])


class JoinEventRequest(BaseModel):
    event_id: int = Field(alias='eventId')

    class Config:
        populate_by_name = True


class StudentEventResponse(EventResponse):
    participating: bool = False
    participant_count: int = Field(default=0, serialization_alias='participantCount')
    participants: list[ParticipationResponse] = []


def list_upcoming_events_for(caller: Caller, db: Session) -> list[StudentEventResponse]:
    upcoming = EventRepository(db).list_upcoming()
    participants = ParticipantRepository(db)
    mine = participants.participations_for(caller.id, (event.id for event in upcoming))

    responses = []
    for event in upcoming:
        participation = mine.get(event.id)
        responses.append(
            StudentEventResponse(
                **EventResponse.model_validate(event).model_dump(),
                participating=participation is not None,
                participant_count=participants.count_for(event.id),
                participants=[ParticipationResponse.model_validate(participation)] if participation else [],
            )
        )
    return responses


@router.get('', response_model=list[StudentEventResponse])
def list_student_events(caller: Caller = Depends(any_member), db: Session = Depends(get_db)):
    return list_upcoming_events_for(caller, db)


@router.post('', response_model=ParticipationResponse, status_code=status.HTTP_201_CREATED)
def join_event(
    caller: Caller = Depends(any_member),
    data: JoinEventRequest = Depends(json_body(JoinEventRequest)),
    db: Session = Depends(get_db),
):
    return ParticipantRepository(db).join(data.event_id, caller.id)


@router.delete('', response_model=MessageResponse)
def withdraw_from_event(
    event_id: int = Query(..., alias='id'),
    caller: Caller = Depends(any_member),
    db: Session = Depends(get_db),
):
    ParticipantRepository(db).withdraw(event_id, caller.id)
    return MessageResponse(message='Withdrawn from event successfully')
