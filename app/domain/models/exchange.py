"""Exchange (troca) — post-order adjustment record, maps to 'trocas'."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class Exchange(Base):
    __tablename__ = "trocas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.id"), nullable=False, index=True)
    item_pedido_id = Column(Integer, ForeignKey("itens_pedido.id", ondelete="SET NULL"), nullable=True)
    produto_id = Column(Integer, ForeignKey("produtos.id"), nullable=False)
    quantidade = Column(Numeric(14, 3), nullable=False)
    valor_troca = Column(Numeric(14, 4), nullable=False, default=0)
    motivo = Column(Text, nullable=True)
    criado_por = Column(Integer, ForeignKey("usuarios.id"), nullable=True)
    criado_em = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    produto = relationship("Product", lazy="joined")

    def __repr__(self):
        return f"<Exchange pedido={self.pedido_id} produto={self.produto_id} x{self.quantidade}>"
