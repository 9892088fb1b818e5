import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from todo.core.errors import DuplicateUsername, InvalidCredentials, NotFound, ValidationError
from todo.core.security import get_password_hash, verify_password
from todo.models.user import User
from todo.stores.users import UserStore

logger = logging.getLogger(__name__)

class AuthService:
    """Registration, credential checks and identity lookup."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserStore(db)

    async def register(self, username: str, raw_password: str, full_name: Optional[str] = None) -> User:
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required")
        if not raw_password:
            raise ValidationError("Password is required")

        if await self.users.get_by_username(username):
            raise DuplicateUsername(f"Username '{username}' already exists")

        user = User(
            username=username,
            hashed_password=get_password_hash(raw_password),
            full_name=(full_name or "").strip() or None,
        )
        self.users.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # lost a race with a concurrent signup for the same name
            await self.db.rollback()
            raise DuplicateUsername(f"Username '{username}' already exists")
        await self.db.refresh(user)

        logger.info("Registered user id=%s username=%s", user.id, user.username)
        return user

    async def login(self, username: str, raw_password: str) -> User:
        user = await self.users.get_by_username((username or "").strip())
        if user is None or not verify_password(raw_password or "", user.hashed_password):
            logger.info("Failed login for username=%s", username)
            raise InvalidCredentials()
        logger.info("User id=%s logged in", user.id)
        return user

    async def find_by_id(self, user_id: int) -> User:
        user = await self.users.get(user_id)
        if user is None:
            raise NotFound(f"User not found with id: {user_id}")
        return user
