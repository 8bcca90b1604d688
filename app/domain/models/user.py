"""User domain model — maps to the 'usuarios' table."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import func

from app.infrastructure.database import Base

PERFIS = ("admin", "backoffice", "vendedor", "motorista")


class User(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(200), nullable=False)
    login = Column(String(100), unique=True, nullable=False, index=True)
    senha_hash = Column(String(255), nullable=False)
    perfil = Column(String(20), nullable=False, default="vendedor")  # admin, backoffice, vendedor, motorista
    rota_id = Column(Integer, ForeignKey("rotas.id"), nullable=True)
    ativo = Column(Boolean, nullable=False, default=True)
    criado_em = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<User {self.login} ({self.perfil})>"
