"""
Configuration de la base de données avec SQLModel
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlmodel import create_engine, SQLModel, Session

from healthpoints.core.settings import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# SQLite refuse par défaut le partage de connexion entre threads (threadpool FastAPI)
_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Créer l'engine de base de données
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    connect_args=_connect_args,
)


def create_db_and_tables():
    """Créer toutes les tables de la base de données"""
    # Enregistrer les tables dans la metadata
    import healthpoints.domain.entities  # noqa: F401

    SQLModel.metadata.create_all(engine)


@contextmanager
def session_scope(bind=None) -> Iterator[Session]:
    """Transaction délimitée : commit en sortie normale, rollback si exception."""
    with Session(bind if bind is not None else engine) as session:
        try:
            yield session
            session.commit()
        except Exception:
            logger.debug("Rollback de la transaction en cours")
            session.rollback()
            raise


def get_session():
    """Générateur de session de base de données pour l'injection de dépendance"""
    with session_scope() as session:
        yield session
