#storefront/data/models/user.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from storefront.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    #id nadawany przez serwis auth, nie autoincrement
    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
