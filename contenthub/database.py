# contenthub/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from contenthub.config import settings


def enable_sqlite_foreign_keys(target_engine):
    """SQLite ignores ON DELETE CASCADE / SET NULL unless asked per connection"""
    @event.listens_for(target_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine_options = {
    "pool_pre_ping": True,  # Check connection health
    "echo": settings.DEBUG,
}

is_sqlite = settings.DATABASE_URL.startswith("sqlite")

if is_sqlite:
    # Local development without Postgres
    engine_options["connect_args"] = {"check_same_thread": False}
else:
    engine_options["pool_size"] = 10
    engine_options["max_overflow"] = 20

# Create engine
engine = create_engine(settings.DATABASE_URL, **engine_options)

if is_sqlite:
    enable_sqlite_foreign_keys(engine)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()
