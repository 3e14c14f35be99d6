# storefront/data/database.py
from typing import Callable, Iterator, TypeVar

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from storefront.utils.logging import get_logger
from storefront.utils.retry import db_connect_retry
from storefront.utils.settings import DATABASE_URL, SQLITE_BUSY_TIMEOUT

logger = get_logger(__name__)

T = TypeVar("T")

Base = declarative_base()


def make_engine(url: str) -> Engine:
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    engine = create_engine(
        url,
        connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
    )

    # pysqlite sam otwiera transakcje dopiero przy pierwszym DML,
    # wiec dwa rownolegle checkouty moga sie zakleszczyc przy podnoszeniu locka.
    # BEGIN IMMEDIATE bierze lock zapisu od razu, reszta czeka na busy timeout
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


engine = make_engine(DATABASE_URL)
SessionLocal = make_session_factory(engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def run_in_transaction(db: Session, fn: Callable[[Session], T]) -> T:
    """
    Wykonuje fn jako jedna jednostke pracy.
    Commit tylko gdy fn skonczy sie bez wyjatku, w przeciwnym razie
    rollback calosci i wyjatek leci dalej.
    """
    try:
        result = fn(db)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return result


@db_connect_retry()
def init_db(bind: Engine | None = None) -> None:
    # import modeli rejestruje tabele w Base.metadata
    import storefront.data.models  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info(f"Tables ready: {sorted(Base.metadata.tables.keys())}")
