"""Client x Product price override (vínculo) — maps to 'cliente_produtos'."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base


class ClientProduct(Base):
    __tablename__ = "cliente_produtos"
    __table_args__ = (
        UniqueConstraint("cliente_id", "produto_id", name="uq_cliente_produtos_cliente_produto"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    cliente_id = Column(Integer, ForeignKey("clientes.id"), nullable=False, index=True)
    produto_id = Column(Integer, ForeignKey("produtos.id"), nullable=False, index=True)
    valor_unitario = Column(Numeric(14, 4), nullable=False)

    cliente = relationship("Client", lazy="joined")
    produto = relationship("Product", lazy="joined")

    def __repr__(self):
        return f"<ClientProduct cliente={self.cliente_id} produto={self.produto_id} {self.valor_unitario}>"
