from datetime import datetime

import pytest

from backend.core.errors import NotFound
from backend.models.event import Event
from backend.models.team import Team
from backend.models.user import User
from backend.repositories.teams import TeamRepository


def test_create_team_without_captain_has_no_members(db, admin) -> None:
    team = TeamRepository(db).create(name='NUML Cricket Club', sport='Cricket', created_by=admin.id)

    assert team.id is not None
    assert team.creator.id == admin.id
    assert team.member_count == 0


def test_create_team_assigns_captain_in_same_transaction(db, admin, student) -> None:
    team = TeamRepository(db).create(
        name='NUML Football Club',
        sport='Football',
        department='Computer Science',
        created_by=admin.id,
        captain_id=student.id,
    )

    db.refresh(student)
    assert student.team_id == team.id
    assert [member.id for member in team.members] == [student.id]


def test_create_team_with_unknown_captain_leaves_no_team_row(db, admin) -> None:
    with pytest.raises(NotFound) as exception_info:
        TeamRepository(db).create(name='Ghost Team', sport='Chess', created_by=admin.id, captain_id=999)

    assert exception_info.value.message == 'Captain not found'
    assert db.query(Team).count() == 0


def test_update_team_changes_only_provided_fields(db, admin) -> None:
    repository = TeamRepository(db)
    team = repository.create(name='Hoops', sport='Basketball', created_by=admin.id)

    updated = repository.update(team.id, name='NUML Basketball Club', sport=None)

    assert updated.name == 'NUML Basketball Club'
    assert updated.sport == 'Basketball'


def test_update_team_with_null_captain_releases_members(db, admin, student, other_student) -> None:
    repository = TeamRepository(db)
    team = repository.create(name='Shuttlers', sport='Badminton', created_by=admin.id, captain_id=student.id)
    repository.update(team.id, captain_id=other_student.id)
    assert repository.get(team.id).member_count == 2

    repository.update(team.id, captain_id=None)

    db.expire_all()
    assert db.query(User).filter(User.team_id == team.id).count() == 0


def test_update_missing_team_raises_not_found(db) -> None:
    with pytest.raises(NotFound) as exception_info:
        TeamRepository(db).update(404, name='Nobody')

    assert exception_info.value.message == 'Team not found'


def test_delete_team_clears_member_and_event_references(db, admin, student, other_student) -> None:
    repository = TeamRepository(db)
    team = repository.create(name='NUML Cricket Club', sport='Cricket', created_by=admin.id, captain_id=student.id)
    repository.update(team.id, captain_id=other_student.id)
    match = Event(
        title='Cricket Final',
        sport='Cricket',
        date=datetime(2030, 3, 15, 10, 0),
        team1_id=team.id,
        team2_id=team.id,
        created_by=admin.id,
    )
    db.add(match)
    db.commit()

    repository.delete(team.id)

    db.expire_all()
    assert db.get(Team, team.id) is None
    assert db.query(User).filter(User.team_id == team.id).count() == 0
    assert db.get(User, student.id) is not None
    reloaded = db.get(Event, match.id)
    assert reloaded.team1_id is None
    assert reloaded.team2_id is None


def test_delete_missing_team_raises_not_found(db) -> None:
    with pytest.raises(NotFound):
        TeamRepository(db).delete(404)


def test_member_counts_include_empty_teams(db, admin, student) -> None:
    repository = TeamRepository(db)
    repository.create(name='Alpha', sport='Cricket', created_by=admin.id, captain_id=student.id)
    repository.create(name='Beta', sport='Football', created_by=admin.id)

    assert repository.member_counts() == [('Alpha', 1), ('Beta', 0)]


def test_list_with_members_returns_newest_first(db, admin) -> None:
    repository = TeamRepository(db)
    first = repository.create(name='First', sport='Cricket', created_by=admin.id)
    second = repository.create(name='Second', sport='Cricket', created_by=admin.id)

    assert [team.id for team in repository.list_with_members()] == [second.id, first.id]
