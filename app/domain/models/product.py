"""Product domain model — maps to the 'produtos' table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class Product(Base):
    __tablename__ = "produtos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo_produto = Column(String(50), unique=True, nullable=False, index=True)
    nome = Column(String(300), nullable=False, index=True)
    embalagem = Column(String(100), nullable=True)
    preco_base = Column(Numeric(14, 4), nullable=True)
    ativo = Column(Boolean, nullable=False, default=True)
    criado_em = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Product {self.codigo_produto} - {self.nome}>"
