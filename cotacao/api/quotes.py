# cotacao/api/quotes.py

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from cotacao.core.config import settings
from cotacao.core.database import get_db
from cotacao.services.exchange import QuoteFetcher
from cotacao.services.quote_store import QuoteStore
from cotacao.services.quotes import QuoteSucceeded, run_quote_cycle

router = APIRouter(tags=["cotacao"])


def get_quote_fetcher() -> QuoteFetcher:
    return QuoteFetcher(url=settings.QUOTE_API_URL, timeout=settings.FETCH_TIMEOUT)


def get_quote_store(db: Session = Depends(get_db)) -> QuoteStore:
    return QuoteStore(db, timeout=settings.STORE_TIMEOUT)


@router.get("/cotacao")
async def get_cotacao(
    fetcher: QuoteFetcher = Depends(get_quote_fetcher),
    store: QuoteStore = Depends(get_quote_store),
):
    """
    Busca a cotação USD/BRL, grava no banco e devolve o JSON original da API.
    Qualquer falha (busca ou gravação) vira 500 com o texto do erro.
    """
    outcome = await run_quote_cycle(fetcher, store)

    if isinstance(outcome, QuoteSucceeded):
        return Response(content=outcome.body, media_type="application/json")

    return PlainTextResponse(
        str(outcome.error),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
