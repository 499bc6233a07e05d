# ligitabl/repositories/users.py
from ligitabl.db.models.user import User
from ligitabl.domain.ids import UserId
from ligitabl.repositories.base import SqlRepository


class UserRepository(SqlRepository):

    def find_display_name(self, user_id: UserId) -> str | None:
        with self.session() as db:
            user = db.get(User, user_id.value)
            return user.display_name if user else None
