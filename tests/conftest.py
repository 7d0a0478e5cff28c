"""Pytest fixtures: banco SQLite temporário e API de cotação simulada."""

import asyncio
import json

import httpx
import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from cotacao.api.quotes import get_quote_fetcher, get_quote_store
from cotacao.core.database import Base, build_engine, get_db
from cotacao.models.conversion import Conversion
from cotacao.services.exchange import QuoteFetcher
from cotacao.services.quote_store import QuoteStore
from main import app

QUOTE_URL = "https://quotes.test/json/last/USD-BRL"

USDBRL = {
    "code": "USD",
    "codein": "BRL",
    "name": "Dólar Americano/Real Brasileiro",
    "high": "5.4512",
    "low": "5.4011",
    "varBid": "0.0123",
    "pctChange": "0.23",
    "bid": "5.43",
    "ask": "5.4312",
    "timestamp": "1718037598",
    "create_date": "2024-06-10 13:39:58",
}

# Corpo com formatação própria, para provar que o servidor devolve os bytes originais
UPSTREAM_BODY = json.dumps({"USDBRL": USDBRL}, indent=1, ensure_ascii=False).encode("utf-8")


def _mock_upstream(body: bytes = UPSTREAM_BODY, status_code: int = 200, delay: float = 0.0) -> httpx.MockTransport:
    async def handler(request: httpx.Request) -> httpx.Response:
        if delay:
            await asyncio.sleep(delay)
        return httpx.Response(status_code, content=body, headers={"Content-Type": "application/json"})

    return httpx.MockTransport(handler)


@pytest.fixture
def quote_url():
    return QUOTE_URL


@pytest.fixture
def usdbrl():
    return dict(USDBRL)


@pytest.fixture
def upstream_body():
    return UPSTREAM_BODY


@pytest.fixture
def upstream():
    """Fábrica de transportes que simulam a API de cotação (corpo, status, atraso)."""
    return _mock_upstream


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}", store_timeout=1.0)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def count_rows(session_factory):
    def _count() -> int:
        with session_factory() as s:
            return s.query(Conversion).count()

    return _count


class ApiHarness:
    """TestClient mais os parâmetros que os testes ajustam antes da chamada."""

    def __init__(self, client: TestClient) -> None:
        self.client = client
        self.transport: httpx.AsyncBaseTransport = _mock_upstream()
        self.fetch_timeout = 0.2
        # Folgado por padrão; o fsync do arquivo temporário pode passar de 10ms
        self.store_timeout = 1.0

    def get(self, path: str = "/cotacao") -> httpx.Response:
        return self.client.get(path)


@pytest.fixture
def api(session_factory):
    harness = ApiHarness(TestClient(app))

    def override_get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    def override_fetcher() -> QuoteFetcher:
        return QuoteFetcher(url=QUOTE_URL, timeout=harness.fetch_timeout, transport=harness.transport)

    def override_store(db: Session = Depends(get_db)) -> QuoteStore:
        return QuoteStore(db, timeout=harness.store_timeout)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_quote_fetcher] = override_fetcher
    app.dependency_overrides[get_quote_store] = override_store
    try:
        yield harness
    finally:
        app.dependency_overrides.clear()
