"""Order (pedido) and OrderItem (item do pedido) domain models."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database import Base


class Order(Base):
    __tablename__ = "pedidos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    chave_pedido = Column(String(100), unique=True, nullable=False, index=True)
    cliente_id = Column(Integer, ForeignKey("clientes.id"), nullable=False, index=True)
    rota_id = Column(Integer, ForeignKey("rotas.id"), nullable=True, index=True)
    data = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="EM_ESPERA", index=True)
    ordem_remaneio = Column(Integer, nullable=True)

    # Scale 7 holds quantidade (3 places) x valor_unitario (4 places) exactly
    valor_total = Column(Numeric(21, 7), nullable=False, default=0)
    valor_efetivado = Column(Numeric(21, 7), nullable=True)

    criado_por = Column(Integer, ForeignKey("usuarios.id"), nullable=True)
    atualizado_por = Column(Integer, ForeignKey("usuarios.id"), nullable=True)
    criado_em = Column(DateTime(timezone=True), server_default=func.now())
    atualizado_em = Column(DateTime(timezone=True), nullable=True)

    cliente = relationship("Client", lazy="joined")
    rota = relationship("Route", lazy="joined")
    itens = relationship(
        "OrderItem",
        back_populates="pedido",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Order {self.chave_pedido} - {self.status}>"


class OrderItem(Base):
    __tablename__ = "itens_pedido"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.id", ondelete="CASCADE"), nullable=False, index=True)
    produto_id = Column(Integer, ForeignKey("produtos.id"), nullable=False, index=True)
    quantidade = Column(Numeric(14, 3), nullable=False)
    embalagem = Column(String(100), nullable=True)
    valor_unitario = Column(Numeric(14, 4), nullable=False)
    valor_total_item = Column(Numeric(21, 7), nullable=False)
    comissao = Column(Numeric(14, 4), nullable=False, default=0)

    pedido = relationship("Order", back_populates="itens")
    produto = relationship("Product", lazy="joined")

    def __repr__(self):
        return f"<OrderItem pedido={self.pedido_id} produto={self.produto_id} x{self.quantidade}>"
