from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from coursehub.core.config import settings

# SQLite connections are bound to the creating thread by default,
# but FastAPI runs sync dependencies in a threadpool
# Other databases (postgresql://...) need no extra connect args
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Create database engine - manages connection pool
# Connection string comes from settings (DATABASE_URL env var or .env)
engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

# Create session factory - each request gets a new session
# autocommit=False: Changes require explicit commit, services commit per operation
# autoflush=False: Nothing is written before the service layer validates and commits
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for all database models
# User and Course inherit from this; tables are created from its metadata at startup
Base = declarative_base()


def get_db():
    """
    Dependency for getting database session.

    This is a FastAPI dependency that provides a database session to route handlers
    and to get_current_user. The session is closed after the request completes.
    """
    db = SessionLocal()
    try:
        # Yield session to route handler
        # Code after yield runs when request completes
        yield db
    finally:
        # Always close session, even if the handler raised
        # Uncommitted work is rolled back when the connection returns to the pool
        db.close()
