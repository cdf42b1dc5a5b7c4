from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from backend.auth.dependencies import Caller, admin_only, any_member
from backend.core import config
from backend.database import get_db
from backend.repositories.events import EventRepository
from backend.repositories.posts import PostRepository
from backend.repositories.teams import TeamRepository
from backend.repositories.users import UserRepository
from backend.schemas import EventResponse, PostResponse, TeamRef

router = APIRouter(tags=['dashboard'])


class DashboardStats(BaseModel):
    total_students: int = Field(serialization_alias='totalStudents')
    total_teams: int = Field(serialization_alias='totalTeams')
    total_events: int = Field(serialization_alias='totalEvents')
    total_posts: int = Field(serialization_alias='totalPosts')


class TeamDistributionEntry(BaseModel):
    name: str
    members: int


class AdminDashboardResponse(BaseModel):
    stats: DashboardStats
    latest_posts: list[PostResponse] = Field(serialization_alias='latestPosts')
    recent_events: list[EventResponse] = Field(serialization_alias='recentEvents')
    team_distribution: list[TeamDistributionEntry] = Field(serialization_alias='teamDistribution')


class StudentProfile(BaseModel):
    id: int
    name: str
    email: str
    student_id: str | None = Field(default=None, serialization_alias='studentID')
    team: TeamRef | None = None

    class Config:
        from_attributes = True


class TeammateResponse(BaseModel):
    name: str
    email: str
    student_id: str | None = Field(default=None, serialization_alias='studentID')

    class Config:
        from_attributes = True


class StudentDashboardResponse(BaseModel):
    student: StudentProfile
    posts: list[PostResponse]
    events: list[EventResponse]
    team_members: list[TeammateResponse] = Field(serialization_alias='teamMembers')


@router.get('/admin/dashboard', response_model=AdminDashboardResponse)
def admin_dashboard(caller: Caller = Depends(admin_only), db: Session = Depends(get_db)):
    events = EventRepository(db)
    posts = PostRepository(db)
    teams = TeamRepository(db)

    stats = DashboardStats(
        total_students=UserRepository(db).count_students(),
        total_teams=teams.count(),
        total_events=events.count(),
        total_posts=posts.count(),
    )
    return AdminDashboardResponse(
        stats=stats,
        latest_posts=posts.list_recent(limit=config.DASHBOARD_RECENT_POSTS),
        recent_events=events.list_all(limit=config.DASHBOARD_RECENT_EVENTS),
        team_distribution=[
            TeamDistributionEntry(name=name, members=members)
            for name, members in teams.member_counts()
        ],
    )


@router.get('/student/dashboard', response_model=StudentDashboardResponse)
def student_dashboard(caller: Caller = Depends(any_member), db: Session = Depends(get_db)):
    users = UserRepository(db)
    student = users.get_with_team(caller.id)

    return StudentDashboardResponse(
        student=student,
        posts=PostRepository(db).list_recent(limit=config.FEED_PAGE_SIZE),
        events=EventRepository(db).list_upcoming(limit=config.DASHBOARD_UPCOMING_EVENTS),
        team_members=users.teammates_of(student),
    )
