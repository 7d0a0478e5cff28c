# cotacao/core/database.py

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from cotacao.core.config import settings

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL


def build_engine(url: str, store_timeout: float = settings.STORE_TIMEOUT) -> Engine:
    """
    Um único engine (pool de conexões) por processo; as sessões são abertas por requisição.
    """
    if url.startswith("sqlite"):
        # check_same_thread=False: o insert roda no threadpool, fora da thread que abriu a sessão.
        # timeout: banco travado por outro escritor não espera mais que o prazo de gravação.
        return create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": store_timeout},
            echo=False,
            future=True,
        )

    # Conexões ociosas do pool podem ter caído; testa antes de usar.
    return create_engine(
        url,
        pool_pre_ping=True,
        echo=False,
        future=True,
    )


engine = build_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
