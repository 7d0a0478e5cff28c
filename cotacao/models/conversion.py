# cotacao/models/conversion.py

from sqlalchemy import Column, String, DateTime
from cotacao.core.database import Base


class Conversion(Base):
    """
    Uma cotação USD/BRL gravada. Registro imutável: só existe inserção.
    """
    __tablename__ = "conversions"

    id = Column(String(36), primary_key=True)  # uuid4

    code = Column(String)
    codein = Column(String)
    name = Column(String)
    high = Column(String)
    low = Column(String)
    var_bid = Column(String)
    pct_change = Column(String)
    bid = Column(String)
    ask = Column(String)
    timestamp = Column(String)
    create_date = Column(String)

    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)
    deleted_at = Column(DateTime, nullable=True)  # sem exclusão lógica por enquanto
