import logging

from sqlalchemy import func
from sqlalchemy.orm import selectinload

from backend.core.errors import NotFound
from backend.models.event import Event
from backend.models.team import Team
from backend.models.user import User
from backend.repositories.base import UNSET, Repository

logger = logging.getLogger(__name__)


class TeamRepository(Repository[Team]):
    """Teams plus the captain and membership writes that go with them.

    ``User.team_id`` is the only link between a team and its members, so every
    write that touches it happens in the same transaction as the team row.
    """

    model = Team
    label = 'Team'

    def list_with_members(self):
        return self.list(
            order_by=(Team.created_at.desc(), Team.id.desc()),
            options=(selectinload(Team.members), selectinload(Team.creator)),
        )

    def member_counts(self) -> list[tuple[str, int]]:
        with self.reading():
            rows = (
                self.db.query(Team.name, func.count(User.id))
                .outerjoin(User, User.team_id == Team.id)
                .group_by(Team.id, Team.name)
                .order_by(Team.name.asc())
                .all()
            )
        return [(name, count) for name, count in rows]

    def _assign_captain(self, team: Team, captain_id: int) -> None:
        captain = self.db.get(User, captain_id)
        if captain is None:
            raise NotFound('Captain not found')
        captain.team_id = team.id

    def _release_members(self, team_id: int) -> None:
        self.db.query(User).filter(User.team_id == team_id).update(
            {User.team_id: None}, synchronize_session=False
        )

    def create(
        self,
        *,
        name: str,
        sport: str,
        created_by: int,
        department: str | None = None,
        captain_id: int | None = None,
    ) -> Team:
        with self.transaction():
            team = Team(name=name, sport=sport, department=department, created_by=created_by)
            self.db.add(team)
            self.db.flush()
            if captain_id is not None:
                self._assign_captain(team, captain_id)
        self.db.refresh(team)
        logger.info('Team %s created by user %s', team.id, created_by)
        return team

    def update(self, record_id: int, *, captain_id=UNSET, **fields) -> Team:
        with self.transaction():
            team = self.require(record_id)
            self.apply(team, fields)
            if captain_id is not UNSET:
                if captain_id:
                    self._assign_captain(team, captain_id)
                else:
                    self._release_members(team.id)
        self.db.refresh(team)
        return team

    def before_delete(self, record: Team) -> None:
        self._release_members(record.id)
        self.db.query(Event).filter(Event.team1_id == record.id).update(
            {Event.team1_id: None}, synchronize_session=False
        )
        self.db.query(Event).filter(Event.team2_id == record.id).update(
            {Event.team2_id: None}, synchronize_session=False
        )

    def delete(self, record_id: int) -> None:
        super().delete(record_id)
        logger.info('Team %s deleted', record_id)
