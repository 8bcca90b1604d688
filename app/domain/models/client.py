"""Client domain model — maps to the 'clientes' table."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class Client(Base):
    __tablename__ = "clientes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    codigo_cliente = Column(String(50), unique=True, nullable=False, index=True)
    nome = Column(String(300), nullable=False, index=True)
    rota_id = Column(Integer, ForeignKey("rotas.id"), nullable=True, index=True)
    ativo = Column(Boolean, nullable=False, default=True)
    link = Column(Text, nullable=True)
    criado_em = Column(DateTime(timezone=True), server_default=func.now())

    rota = relationship("Route", lazy="joined")

    def __repr__(self):
        return f"<Client {self.codigo_cliente} - {self.nome}>"
