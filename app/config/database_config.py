from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config.env_config import settings
from app.utils.logger_utils import log_info

DATABASE_URL = settings.database_url

# SQLite connections are shared with the threadpool FastAPI runs sync routes in
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

log_info(context="DATABASE", message=f"Database engine ready ({engine.dialect.name})")

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
