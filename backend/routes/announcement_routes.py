from backend.auth.dependencies import Caller, admin_only, is_author_or_moderator
from backend.repositories.posts import PostRepository
from backend.routes.resource import RoleGatedResource
from backend.schemas import PostContentRequest, PostResponse, PostUpdateRequest


class AnnouncementResource(RoleGatedResource):
    """Posts written by admins. Any admin may edit or remove any announcement."""

    label = 'Announcement'
    repository_class = PostRepository

    def list_records(self, repository: PostRepository, caller: Caller):
        return repository.list_announcements()

    def get_record(self, repository: PostRepository, caller: Caller, record_id: int):
        with repository.reading():
            return repository.require_announcement(record_id)

    def create_fields(self, data: PostContentRequest, caller: Caller) -> dict:
        return {**data.model_dump(), 'user_id': caller.id}

    def update_record(self, repository: PostRepository, caller: Caller, data: PostUpdateRequest):
        return repository.update_owned(
            data.id,
            caller,
            is_author_or_moderator,
            announcement=True,
            **self.update_fields(data),
        )

    def delete_record(self, repository: PostRepository, caller: Caller, record_id: int) -> None:
        repository.delete_owned(record_id, caller, is_author_or_moderator, announcement=True)


announcements = AnnouncementResource(
    gate=admin_only,
    response_model=PostResponse,
    create_model=PostContentRequest,
    update_model=PostUpdateRequest,
)

router = announcements.build_router(tags=['announcements'])
