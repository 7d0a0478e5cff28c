from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from fastapi.concurrency import run_in_threadpool

from cotacao.schemas.quote import Quote
from cotacao.services.exchange import QuoteFetchError, QuoteFetcher
from cotacao.services.quote_store import QuoteStore, QuoteStoreError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchFailed:
    error: QuoteFetchError


@dataclass(frozen=True)
class StoreFailed:
    """A cotação foi buscada, mas não foi gravada."""
    quote: Quote
    body: bytes
    error: QuoteStoreError


@dataclass(frozen=True)
class QuoteSucceeded:
    quote: Quote
    body: bytes
    conversion_id: str


QuoteOutcome = Union[FetchFailed, StoreFailed, QuoteSucceeded]


async def run_quote_cycle(fetcher: QuoteFetcher, store: QuoteStore) -> QuoteOutcome:
    """Busca e grava em sequência; cada etapa tem o seu próprio prazo."""
    try:
        fetched = await fetcher.fetch()
    except QuoteFetchError as e:
        logger.warning("Falha ao buscar cotação: %s", e)
        return FetchFailed(error=e)

    # O insert é bloqueante; roda no threadpool para não travar o event loop.
    try:
        conversion_id = await run_in_threadpool(store.save, fetched.quote)
    except QuoteStoreError as e:
        logger.warning("Cotação buscada (bid=%s) mas não gravada: %s", fetched.quote.bid, e)
        return StoreFailed(quote=fetched.quote, body=fetched.body, error=e)

    logger.info("Cotação gravada: id=%s bid=%s", conversion_id, fetched.quote.bid)
    return QuoteSucceeded(quote=fetched.quote, body=fetched.body, conversion_id=conversion_id)
