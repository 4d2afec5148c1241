from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from thesis_portal.core.config import settings

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, future=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
