# cotacao/services/quote_store.py

from __future__ import annotations

import logging
import time
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from cotacao.models.conversion import Conversion
from cotacao.schemas.quote import Quote

logger = logging.getLogger(__name__)

# Quantas instruções da VM do SQLite entre cada checagem do prazo
_PROGRESS_STEPS = 100


class QuoteStoreError(Exception):
    """Falha ao gravar a cotação (conexão, comando ou restrição)."""


class QuoteStoreTimeout(QuoteStoreError):
    pass


def new_conversion(quote: Quote) -> Conversion:
    now = datetime.now(timezone.utc)
    return Conversion(
        id=str(uuid.uuid4()),
        code=quote.code,
        codein=quote.codein,
        name=quote.name,
        high=quote.high,
        low=quote.low,
        var_bid=quote.var_bid,
        pct_change=quote.pct_change,
        bid=quote.bid,
        ask=quote.ask,
        timestamp=quote.timestamp,
        create_date=quote.create_date,
        created_at=now,
        updated_at=now,
        deleted_at=None,
    )


class QuoteStore:
    def __init__(self, db: Session, timeout: float = 0.01) -> None:
        self.db = db
        self.timeout = timeout

    def save(self, quote: Quote) -> str:
        """
        Insere uma linha em `conversions` dentro do prazo e devolve o id gerado.
        Se o prazo estourar, a transação é desfeita e nada fica gravado.
        """
        started = time.monotonic()

        def expired() -> bool:
            return time.monotonic() - started >= self.timeout

        conversion = new_conversion(quote)
        conversion_id = conversion.id
        try:
            with self._interrupt_after(expired):
                self.db.add(conversion)
                self.db.flush()
            if expired():
                raise QuoteStoreTimeout(self._timeout_message())
            self.db.commit()
        except QuoteStoreTimeout:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            if expired():
                raise QuoteStoreTimeout(self._timeout_message()) from e
            raise QuoteStoreError(str(e)) from e

        return conversion_id

    def _timeout_message(self) -> str:
        return f"insert into conversions exceeded {self.timeout * 1000:.0f}ms deadline"

    @contextmanager
    def _interrupt_after(self, expired):
        # No SQLite o comando em execução é abortado pelo progress handler.
        # Nos demais bancos vale apenas a checagem antes do commit.
        if self.db.get_bind().dialect.name != "sqlite":
            yield
            return

        raw = self.db.connection().connection.driver_connection
        raw.set_progress_handler(lambda: 1 if expired() else 0, _PROGRESS_STEPS)
        try:
            yield
        finally:
            raw.set_progress_handler(None, _PROGRESS_STEPS)
