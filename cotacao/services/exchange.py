from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from cotacao.schemas.quote import Quote, QuoteEnvelope

logger = logging.getLogger(__name__)

USD_BRL_URL = "https://economia.awesomeapi.com.br/json/last/USD-BRL"


class QuoteFetchError(Exception):
    """Falha ao buscar a cotação na API externa (rede, status, prazo ou JSON)."""


class QuoteFetchTimeout(QuoteFetchError):
    pass


@dataclass(frozen=True)
class FetchedQuote:
    quote: Quote
    body: bytes  # corpo original, devolvido sem alteração ao cliente


def _describe(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


class QuoteFetcher:
    def __init__(
        self,
        url: str = USD_BRL_URL,
        timeout: float = 0.2,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def fetch(self) -> FetchedQuote:
        # O prazo cobre a chamada inteira, não cada fase do httpx.
        try:
            return await asyncio.wait_for(self._fetch(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise QuoteFetchTimeout(
                f"quote request to {self.url} exceeded {self.timeout * 1000:.0f}ms deadline"
            ) from e

    async def _fetch(self) -> FetchedQuote:
        async with httpx.AsyncClient(transport=self._transport) as client:
            try:
                r = await client.get(self.url)
                r.raise_for_status()
            except httpx.HTTPError as e:
                raise QuoteFetchError(_describe(e)) from e

        body = r.content
        try:
            envelope = QuoteEnvelope.model_validate_json(body)
        except ValidationError as e:
            raise QuoteFetchError(f"invalid quote payload: {e}") from e

        logger.debug("Cotação recebida: bid=%s", envelope.usdbrl.bid)
        return FetchedQuote(quote=envelope.usdbrl, body=body)
