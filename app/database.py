# app/database.py
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings


def make_engine(db_url: str, **kwargs) -> Engine:
    """Cria o motor do banco de dados.

    No SQLite as chaves estrangeiras vêm desligadas por conexão; o listener
    liga o PRAGMA para que o ON DELETE CASCADE de logradouros seja respeitado.
    """
    connect_args = kwargs.pop("connect_args", {})
    if db_url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)

    engine = create_engine(db_url, connect_args=connect_args, **kwargs)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _ativar_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def make_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Define o motor de banco de dados
engine = make_engine(settings.DATABASE_URL, echo=settings.ENVIRONMENT == "development")

# Cria uma fábrica de sessões
SessionLocal = make_sessionmaker(engine)


# Dependência para obter uma sessão de banco de dados
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
