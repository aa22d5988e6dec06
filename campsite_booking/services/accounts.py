# campsite_booking/services/accounts.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from campsite_booking import auth, models
from campsite_booking.database import transaction
from campsite_booking.errors import AuthError, NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)


class Accounts:
    def __init__(self, db: Session):
        self.db = db

    def _email_taken(self, email: str, exclude_user_id: Optional[int] = None) -> bool:
        query = self.db.query(models.User.id).filter(models.User.email == email)
        if exclude_user_id is not None:
            query = query.filter(models.User.id != exclude_user_id)
        return query.first() is not None

    def register(self, name: str, email: str, password: str, is_owner: bool = False) -> models.User:
        if self._email_taken(email):
            raise StorageError("Email already exists", status_code=400)

        user = models.User(
            name=name,
            email=email,
            password=auth.get_password_hash(password),
            is_owner=bool(is_owner)
        )
        with transaction(self.db):
            self.db.add(user)
        self.db.refresh(user)
        logger.info("Registered user %s (owner=%s)", user.id, user.is_owner)
        return user

    def authenticate(self, email: str, password: str) -> models.User:
        user = self.db.query(models.User).filter(models.User.email == email).first()
        if not user or not auth.verify_password(password, user.password):
            raise AuthError("Invalid credentials")
        return user

    def get_profile(self, user_id: int) -> dict:
        user = self.db.query(models.User).filter(models.User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return {"id": user.id, "name": user.name, "email": user.email, "is_owner": bool(user.is_owner)}

    def update_profile(self, user_id: int, name: str, email: str, password: Optional[str] = None) -> None:
        if not name or not email:
            raise ValidationError("Name and email are required")

        user = self.db.query(models.User).filter(models.User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        if self._email_taken(email, exclude_user_id=user_id):
            raise StorageError("Email already exists", status_code=400)

        with transaction(self.db):
            user.name = name
            user.email = email
            # A blank password leaves the current one in place.
            if password and password.strip():
                user.password = auth.get_password_hash(password)
