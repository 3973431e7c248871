"""Create the demo accounts if they do not exist yet."""
import logging

from taskboard.config import LOG_LEVEL
from taskboard.database import create_tables, get_session
from taskboard.logging_setup import setup_logging
from taskboard.routers.auth import get_password_hash
from taskboard.services import UserStore

logger = logging.getLogger("taskboard.seed")

DEMO_USERS = [
    ("user1@example.com", "123user1", "Test User 1"),
    ("user2@example.com", "123user2", "Test User 2"),
]


def seed_users() -> None:
    create_tables()
    with get_session() as session:
        store = UserStore(session)
        for email, password, name in DEMO_USERS:
            if store.get_by_email(email) is not None:
                logger.info("User %s already exists, skipping", email)
                continue
            store.create(email, get_password_hash(password), name)
            logger.info("Created user %s / %s", email, password)


if __name__ == "__main__":
    setup_logging(level=LOG_LEVEL)
    seed_users()
