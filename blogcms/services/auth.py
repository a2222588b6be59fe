import logging
from datetime import timedelta
from typing import Optional
from sqlmodel import Session, select, or_

from blogcms.core.config import Settings
from blogcms.core.security import create_access_token, verify_password
from blogcms.models.user import User

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session: Session, settings: Settings):
        self.session = session
        self.settings = settings

    def get_user_by_login(self, login: str) -> Optional[User]:
        """Look a user up by username or email."""
        return self.session.exec(
            select(User).where(or_(User.username == login, User.email == login))
        ).first()

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def authenticate_user(self, login: str, password: str) -> Optional[User]:
        user = self.get_user_by_login(login)
        if not user or not verify_password(password, user.password_hash):
            logger.info("Failed login for '%s'", login)
            return None
        logger.info("User '%s' logged in", user.username)
        return user

    def create_token_for(self, user: User) -> str:
        return create_access_token(
            data={"sub": str(user.id), "username": user.username, "role": user.role},
            secret_key=self.settings.JWT_SECRET,
            algorithm=self.settings.ALGORITHM,
            expires_delta=timedelta(minutes=self.settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
