# cotacao/schemas/quote.py

from pydantic import BaseModel, ConfigDict, Field


class Quote(BaseModel):
    """
    Cotação como chega da AwesomeAPI. Todos os campos são strings opacas,
    sem conversão numérica.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    code: str
    codein: str
    name: str
    high: str
    low: str
    var_bid: str = Field(alias="varBid")
    pct_change: str = Field(alias="pctChange")
    bid: str
    ask: str
    timestamp: str
    create_date: str


class QuoteEnvelope(BaseModel):
    usdbrl: Quote = Field(alias="USDBRL")


class BidOnly(BaseModel):
    bid: str


class BidEnvelope(BaseModel):
    """Formato mínimo que o cliente precisa ler da resposta do servidor."""
    usdbrl: BidOnly = Field(alias="USDBRL")
