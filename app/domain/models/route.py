"""Route domain model — maps to the 'rotas' table."""

from sqlalchemy import Column, Integer, String

from app.infrastructure.database import Base


class Route(Base):
    __tablename__ = "rotas"

    id = Column(Integer, primary_key=True, autoincrement=True)
    nome = Column(String(200), unique=True, nullable=False)

    def __repr__(self):
        return f"<Route {self.id} - {self.nome}>"
