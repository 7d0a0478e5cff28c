# cotacao/core/config.py

import os
from dotenv import load_dotenv

# Caminho da raiz do projeto (onde está o main.py e o .env)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
ENV_PATH = os.path.join(BASE_DIR, ".env")

# Carrega variáveis do arquivo .env, se existir
if os.path.exists(ENV_PATH):
    load_dotenv(ENV_PATH)


def _ms(name: str, default: float) -> float:
    """Lê um prazo em milissegundos e devolve em segundos."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default / 1000
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} deve ser um número de milissegundos, recebido {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} não pode ser negativo, recebido {raw!r}")
    return value / 1000


class Settings:
    def __init__(self) -> None:
        self.DATABASE_URL: str = os.getenv(
            "DATABASE_URL",
            "sqlite:///./sample.db",
        )

        # Servidor: API externa de cotação e prazos de cada etapa
        self.QUOTE_API_URL: str = os.getenv(
            "QUOTE_API_URL",
            "https://economia.awesomeapi.com.br/json/last/USD-BRL",
        )
        self.FETCH_TIMEOUT: float = _ms("FETCH_TIMEOUT_MS", 200)
        self.STORE_TIMEOUT: float = _ms("STORE_TIMEOUT_MS", 10)

        # Cliente
        self.SERVER_URL: str = os.getenv("SERVER_URL", "http://localhost:8080/cotacao")
        self.CLIENT_TIMEOUT: float = _ms("CLIENT_TIMEOUT_MS", 300)
        self.OUTPUT_PATH: str = os.getenv("OUTPUT_PATH", "cotacao.txt")

        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
