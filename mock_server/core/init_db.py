import logging
import uuid

from sqlmodel import Session, select

from dashboard.core.rbac import ADMIN_ROLE, VALID_ROLES

from .database import engine
from .settings import settings
from ..models.User import User
from ..auth.service import get_password_hash

logger = logging.getLogger(__name__)


def dev_password(user_name: str) -> str:
    return f"{user_name}123"


def seed_users(session: Session) -> None:
    """
    Creates one development user per role (password: <userName>123).
    """
    for user_name in VALID_ROLES:
        statement = select(User).where(User.user_name == user_name)
        if session.exec(statement).first():
            continue

        logger.info("Creating development user: %s", user_name)
        session.add(User(
            id=uuid.uuid5(uuid.NAMESPACE_URL, f"hesabat:{user_name}").hex[:24],
            user_name=user_name,
            role=ADMIN_ROLE if user_name == ADMIN_ROLE else "factory",
            hashed_password=get_password_hash(dev_password(user_name)),
        ))
    session.commit()


def init_db():
    if not settings.SEED_USERS:
        return
    with Session(engine) as session:
        seed_users(session)
