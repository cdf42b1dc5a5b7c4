from sqlalchemy.orm import selectinload

from backend.core.errors import NotFound
from backend.models.user import Role, User
from backend.repositories.base import Repository


class UserRepository(Repository[User]):
    model = User
    label = 'User'

    def list_students(self):
        return self.list(User.role == Role.STUDENT.value, order_by=(User.name.asc(), User.id.asc()))

    def count_students(self) -> int:
        return self.count(User.role == Role.STUDENT.value)

    def get_with_team(self, user_id: int) -> User:
        with self.reading():
            user = (
                self.db.query(User)
                .options(selectinload(User.team))
                .filter(User.id == user_id)
                .first()
            )
        if user is None:
            raise NotFound('Student not found')
        return user

    def teammates_of(self, user: User):
        if user.team_id is None:
            return []
        return self.list(
            User.team_id == user.team_id,
            User.id != user.id,
            order_by=(User.name.asc(),),
        )
