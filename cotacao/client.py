# cotacao/client.py

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import httpx
from pydantic import ValidationError

from cotacao.core.config import settings
from cotacao.core.logging_setup import setup_logging
from cotacao.schemas.quote import BidEnvelope

logger = logging.getLogger(__name__)


class QuoteClientError(Exception):
    pass


@dataclass(frozen=True)
class ClientConfig:
    server_url: str = "http://localhost:8080/cotacao"
    timeout: float = 0.3
    output_path: str = "cotacao.txt"
    label: str = "Dólar"

    @classmethod
    def from_settings(cls) -> "ClientConfig":
        return cls(
            server_url=settings.SERVER_URL,
            timeout=settings.CLIENT_TIMEOUT,
            output_path=settings.OUTPUT_PATH,
        )


async def _get_bid(config: ClientConfig, transport: httpx.AsyncBaseTransport | None) -> str:
    async with httpx.AsyncClient(transport=transport) as client:
        try:
            r = await client.get(config.server_url)
        except httpx.HTTPError as e:
            raise QuoteClientError(str(e) or e.__class__.__name__) from e

    if r.status_code != httpx.codes.OK:
        raise QuoteClientError(f"Request failed: {r.status_code} {r.text}")

    try:
        return BidEnvelope.model_validate_json(r.content).usdbrl.bid
    except ValidationError as e:
        raise QuoteClientError(f"invalid response body: {e}") from e


async def fetch_bid(config: ClientConfig, transport: httpx.AsyncBaseTransport | None = None) -> str:
    try:
        return await asyncio.wait_for(_get_bid(config, transport), timeout=config.timeout)
    except asyncio.TimeoutError as e:
        raise QuoteClientError(
            f"request to {config.server_url} exceeded {config.timeout * 1000:.0f}ms deadline"
        ) from e


def write_quote_file(path: str | Path, label: str, bid: str) -> int:
    """Grava `"<label>: <bid>"` em UTF-8, sem quebra de linha. Retorna o total de bytes."""
    data = f"{label}: {bid}".encode("utf-8")
    with open(path, "wb") as f:
        return f.write(data)


def main(config: ClientConfig | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
    setup_logging()
    config = config or ClientConfig.from_settings()

    try:
        bid = asyncio.run(fetch_bid(config, transport))
        size = write_quote_file(config.output_path, config.label, bid)
    except (QuoteClientError, OSError) as e:
        logger.error("%s", e)
        sys.exit(1)

    print(f"Arquivo criado com sucesso! Tamanho: {size} bytes")


if __name__ == "__main__":
    main()
