import logging
from typing import Callable

from sqlalchemy.orm import selectinload

from backend.auth.dependencies import Caller
from backend.core.errors import Forbidden
from backend.models.post import Post
from backend.models.user import Role, User
from backend.repositories.base import Repository

logger = logging.getLogger(__name__)

OwnershipCheck = Callable[[Caller, Post], bool]


class PostRepository(Repository[Post]):
    model = Post
    label = 'Post'

    def with_author(self):
        return (selectinload(Post.author).selectinload(User.team),)

    def list_recent(self, limit: int | None = None):
        return self.list(
            order_by=(Post.created_at.desc(), Post.id.desc()),
            limit=limit,
            options=self.with_author(),
        )

    def list_announcements(self):
        with self.reading():
            return (
                self.db.query(Post)
                .join(User, Post.user_id == User.id)
                .options(*self.with_author())
                .filter(User.role == Role.ADMIN.value)
                .order_by(Post.created_at.desc(), Post.id.desc())
                .all()
            )

    def require_announcement(self, post_id: int) -> Post:
        post = self.require(post_id)
        if post.author is None or post.author.role != Role.ADMIN.value:
            raise self.not_found()
        return post

    def _require_owned(
        self, post_id: int, caller: Caller, allowed: OwnershipCheck, announcement: bool
    ) -> Post:
        post = self.require_announcement(post_id) if announcement else self.require(post_id)
        if not allowed(caller, post):
            raise Forbidden('Only the author can change this post')
        return post

    def update_owned(
        self,
        post_id: int,
        caller: Caller,
        allowed: OwnershipCheck,
        announcement: bool = False,
        **fields,
    ) -> Post:
        with self.transaction():
            post = self._require_owned(post_id, caller, allowed, announcement)
            self.apply(post, fields)
        self.db.refresh(post)
        return post

    def delete_owned(
        self, post_id: int, caller: Caller, allowed: OwnershipCheck, announcement: bool = False
    ) -> None:
        with self.transaction():
            post = self._require_owned(post_id, caller, allowed, announcement)
            if post.user_id != caller.id:
                logger.info('Post %s removed by moderator %s', post.id, caller.id)
            self.db.delete(post)
