# storefront/services/user_service.py
from sqlalchemy.orm import Session

from storefront.data.database import run_in_transaction
from storefront.domain.errors import UserNotFound
from storefront.domain.schemas import UserCreate, UserRead
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepo(db)

    def create_user(self, payload: UserCreate) -> UserRead:
        """Idempotentne - istniejacy user jest zwracany bez zmian."""
        user = run_in_transaction(
            self.db, lambda db: self.repo.get_or_create_user(payload.id, payload.name)
        )
        logger.info(f"User {user.id} ready")
        return UserRead.model_validate(user)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise UserNotFound(user_id)
        return UserRead.model_validate(user)
