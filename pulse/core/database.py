from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from pulse.core.config import settings

# sqlite: la session peut changer de thread (threadpool FastAPI)
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def init_db(bind=None):
    """Crée les tables manquantes"""
    import pulse.models.stored_value  # noqa: F401  (enregistre la table sur Base)
    Base.metadata.create_all(bind=bind or engine)
