import logging
from datetime import datetime

from sqlalchemy.orm import selectinload

from backend.core.errors import NotFound
from backend.models.event import Event
from backend.models.team import Team
from backend.repositories.base import Repository

logger = logging.getLogger(__name__)

TEAM_FIELDS = ('team1_id', 'team2_id')


class EventRepository(Repository[Event]):
    model = Event
    label = 'Event'

    def list_all(self, limit: int | None = None):
        return self.list(
            order_by=(Event.created_at.desc(), Event.id.desc()),
            limit=limit,
            options=(selectinload(Event.creator),),
        )

    def list_upcoming(self, now: datetime | None = None, limit: int | None = None):
        now = now or datetime.now()
        return self.list(
            Event.date >= now,
            order_by=(Event.date.asc(), Event.id.asc()),
            limit=limit,
            options=(selectinload(Event.creator),),
        )

    def _check_teams(self, fields: dict) -> None:
        for name in TEAM_FIELDS:
            team_id = fields.get(name)
            if team_id is not None and self.db.get(Team, team_id) is None:
                raise NotFound('Team not found')

    def create(self, **fields) -> Event:
        self._check_teams(fields)
        event = super().create(**fields)
        logger.info('Event %s created by user %s', event.id, event.created_by)
        return event

    def update(self, record_id: int, **fields) -> Event:
        self._check_teams(fields)
        return super().update(record_id, **fields)

    def before_delete(self, record: Event) -> None:
        for participation in list(record.participants):
            self.db.delete(participation)
