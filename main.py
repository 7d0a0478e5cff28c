# main.py

import uvicorn
from fastapi import FastAPI

from cotacao.core.database import engine, Base
from cotacao.core.logging_setup import setup_logging

# Importa os models para registrá-los no Base.metadata
from cotacao.models.conversion import Conversion  # noqa: F401

from cotacao.api.quotes import router as quotes_router

setup_logging()

app = FastAPI(
    title="Cotação USD/BRL API",
    version="0.1.0",
)


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)


app.include_router(quotes_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8080)
