# portfolio/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from portfolio.config import DATABASE_URL, SQL_ECHO

url = make_url(DATABASE_URL)
is_sqlite = url.drivername.startswith("sqlite")

connect_args = {}
engine_kwargs = {"pool_pre_ping": True}
# Required for SQLite when used with FastAPI/threads
if is_sqlite:
    connect_args["check_same_thread"] = False
    # one shared connection, otherwise every checkout sees a fresh empty db
    if url.database in (None, "", ":memory:"):
        engine_kwargs["poolclass"] = StaticPool

# Built once per process; handlers get sessions from get_db()
engine = create_engine(
    DATABASE_URL,
    echo=SQL_ECHO,
    connect_args=connect_args,
    **engine_kwargs,
)


if is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_fks(dbapi_connection, connection_record):
        # SQLite ignores ON DELETE CASCADE unless this is set per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
