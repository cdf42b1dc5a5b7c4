from backend.auth.dependencies import Caller, any_member, is_author
from backend.core import config
from backend.repositories.posts import PostRepository
from backend.routes.resource import RoleGatedResource
from backend.schemas import PostContentRequest, PostResponse, PostUpdateRequest


class FeedResource(RoleGatedResource):
    """The shared social feed. Posts can only be changed by their author."""

    label = 'Post'
    repository_class = PostRepository

    def list_records(self, repository: PostRepository, caller: Caller):
        return repository.list_recent(limit=config.FEED_PAGE_SIZE)

    def create_fields(self, data: PostContentRequest, caller: Caller) -> dict:
        return {**data.model_dump(), 'user_id': caller.id}

    def update_record(self, repository: PostRepository, caller: Caller, data: PostUpdateRequest):
        return repository.update_owned(data.id, caller, is_author, **self.update_fields(data))

    def delete_record(self, repository: PostRepository, caller: Caller, record_id: int) -> None:
        repository.delete_owned(record_id, caller, is_author)


feed = FeedResource(
    gate=any_member,
    response_model=PostResponse,
    create_model=PostContentRequest,
    update_model=PostUpdateRequest,
)

router = feed.build_router(tags=['feed'])
