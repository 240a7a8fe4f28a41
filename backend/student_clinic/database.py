#Creates a connection engine to your database.
from sqlalchemy import create_engine
#Base class for SQLAlchemy ORM models and factory for creating database sessions.
from sqlalchemy.orm import declarative_base, sessionmaker
#Configuration object containing the database URL
from .config import settings

# SQLite connections are shared between the threadpool workers FastAPI uses for sync routes
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

# Create SQLAlchemy engine
engine = create_engine(settings.database_url, connect_args=connect_args)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class
Base = declarative_base()

# Dependency to get DB session
def get_db():
    #Creates a new database session.
    db = SessionLocal()
    try:
        #Makes it available to route functions.
        yield db
    finally:
        db.close() #Ensures the session is closed properly
