import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.core import config


logger = logging.getLogger(__name__)


def _connect_args(url: str) -> dict:
    # SQLite connections are shared across the threadpool FastAPI runs sync routes in.
    if url.startswith('sqlite'):
        return {'check_same_thread': False}
    return {}


engine = create_engine(
    config.DATABASE_URL,
    echo=config.DATABASE_ECHO,
    connect_args=_connect_args(config.DATABASE_URL),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()


def init_db(bind=None) -> None:
    # Model modules register their tables on Base when imported.
    from backend.models import event, event_participant, post, team, user  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info('Database schema ready')


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
