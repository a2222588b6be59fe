import logging

from sqlalchemy.engine import Engine
from sqlmodel import Session, select, or_

from blogcms.core.config import Settings
from blogcms.core.security import get_password_hash
from blogcms.models.category import Category
from blogcms.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    dict(
        id="technology",
        name_en="Technology",
        name_zh="技术",
        description_en="Technology related posts",
        description_zh="技术相关文章",
    ),
    dict(
        id="life",
        name_en="Life",
        name_zh="生活",
        description_en="Life and personal posts",
        description_zh="生活和个人文章",
    ),
    dict(
        id="thoughts",
        name_en="Thoughts",
        name_zh="思考",
        description_en="Personal thoughts and reflections",
        description_zh="个人思考和感悟",
    ),
]


def seed_admin(session: Session, settings: Settings) -> None:
    existing = session.exec(
        select(User).where(
            or_(
                User.username == settings.DEFAULT_ADMIN_USERNAME,
                User.email == settings.DEFAULT_ADMIN_EMAIL,
            )
        )
    ).first()
    if existing:
        return

    session.add(User(
        username=settings.DEFAULT_ADMIN_USERNAME,
        email=settings.DEFAULT_ADMIN_EMAIL,
        password_hash=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD),
        role="admin",
    ))
    session.commit()
    logger.info("Created default admin account '%s'", settings.DEFAULT_ADMIN_USERNAME)
    logger.warning("Please change the default admin password after first login")


def seed_categories(session: Session) -> None:
    added = 0
    for category in DEFAULT_CATEGORIES:
        if session.get(Category, category["id"]):
            continue
        session.add(Category(**category))
        added += 1

    if added:
        session.commit()
        logger.info("Seeded %d categories", added)


def seed_database(engine: Engine, settings: Settings) -> None:
    with Session(engine) as session:
        seed_admin(session, settings)
        seed_categories(session)


if __name__ == "__main__":
    from blogcms.core.config import settings
    from blogcms.core.logging import configure_logging
    from blogcms.db.session import build_engine, create_db_and_tables

    configure_logging(settings.LOG_LEVEL)
    engine = build_engine(settings.DATABASE_URL)
    print("Creating database and tables...")
    create_db_and_tables(engine)
    seed_database(engine, settings)
    print("Done.")
