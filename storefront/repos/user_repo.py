# storefront/repos/user_repo.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel


class UserRepo:
    """Userzy sa tylko referencja dla koszykow i zamowien. Bez commitow."""

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.flush()
        return user

    def get_or_create_user(self, user_id: int, name: str) -> UserModel:
        user = self.get_user(user_id)
        if user:
            return user

        #ten sam id moze przyjsc w dwoch requestach naraz, PK rozstrzyga
        try:
            with self.db.begin_nested():
                user = self.create_user(UserModel(id=user_id, name=name))
        except IntegrityError:
            user = self.get_user(user_id)
            if user is None:
                raise
        return user
