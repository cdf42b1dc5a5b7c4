from pydantic import BaseModel, Field

from backend.auth.dependencies import Caller, admin_only
from backend.repositories.teams import TeamRepository
from backend.routes.resource import RoleGatedResource
from backend.schemas import OptionalText, RequiredText, TeamResponse


class CreateTeamRequest(BaseModel):
    name: RequiredText
    sport: RequiredText
    department: OptionalText = None
    captain_id: int | None = Field(default=None, alias='captainId')

    class Config:
        populate_by_name = True


class UpdateTeamRequest(BaseModel):
    """``captainId`` assigns that user to the team; an explicit null releases every member."""

    id: int
    name: RequiredText | None = None
    sport: RequiredText | None = None
    department: OptionalText = None
    captain_id: int | None = Field(default=None, alias='captainId')

    class Config:
        populate_by_name = True


class TeamResource(RoleGatedResource):
    label = 'Team'
    repository_class = TeamRepository

    def list_records(self, repository: TeamRepository, caller: Caller):
        return repository.list_with_members()

    def create_fields(self, data: CreateTeamRequest, caller: Caller) -> dict:
        return {**data.model_dump(), 'created_by': caller.id}


teams = TeamResource(
    gate=admin_only,
    response_model=TeamResponse,
    create_model=CreateTeamRequest,
    update_model=UpdateTeamRequest,
)

router = teams.build_router(tags=['teams'])
