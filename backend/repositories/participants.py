import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from backend.core.errors import Conflict, NotFound, PortalError
from backend.models.event import Event
from backend.models.event_participant import EventParticipant
from backend.repositories.base import Repository

logger = logging.getLogger(__name__)


class ParticipantRepository(Repository[EventParticipant]):
    """Event participation rows; at most one per (event, user)."""

    model = EventParticipant
    label = 'Participation'

    def translate_error(self, exc: SQLAlchemyError) -> PortalError:
        # A concurrent join can slip past the existence check and hit the unique constraint.
        if isinstance(exc, IntegrityError):
            return Conflict('Already participating in this event')
        return super().translate_error(exc)

    def _find(self, event_id: int, user_id: int) -> EventParticipant | None:
        return (
            self.db.query(EventParticipant)
            .filter(EventParticipant.event_id == event_id, EventParticipant.user_id == user_id)
            .first()
        )

    def join(self, event_id: int, user_id: int) -> EventParticipant:
        with self.transaction():
            if self.db.get(Event, event_id) is None:
                raise NotFound('Event not found')
            if self._find(event_id, user_id) is not None:
                raise Conflict('Already participating in this event')
            participation = EventParticipant(event_id=event_id, user_id=user_id)
            self.db.add(participation)
        self.db.refresh(participation)
        logger.info('User %s joined event %s', user_id, event_id)
        return participation

    def withdraw(self, event_id: int, user_id: int) -> None:
        with self.transaction():
            participation = self._find(event_id, user_id)
            if participation is None:
                raise NotFound('Not participating in this event')
            self.db.delete(participation)
        logger.info('User %s withdrew from event %s', user_id, event_id)

    def participations_for(self, user_id: int, event_ids) -> dict[int, EventParticipant]:
        event_ids = list(event_ids)
        if not event_ids:
            return {}
        rows = self.list(
            EventParticipant.user_id == user_id,
            EventParticipant.event_id.in_(event_ids),
        )
        return {row.event_id: row for row in rows}

    def count_for(self, event_id: int) -> int:
        return self.count(EventParticipant.event_id == event_id)
