"""
SQLAlchemy Implementation of Route Repository.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func

from app.domain.models.client import Client
from app.domain.models.order import Order
from app.domain.models.route import Route
from app.domain.models.user import User
from app.domain.repositories.route_repository import RouteRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyRouteRepository(SQLAlchemyRepository[Route], RouteRepository):
    """Route repository implementation using SQLAlchemy."""

    def list_with_counts(self) -> List[Dict[str, Any]]:
        clientes = (
            self.db.query(Client.rota_id, func.count(Client.id).label("total"))
            .filter(Client.rota_id.isnot(None))
            .group_by(Client.rota_id)
            .subquery()
        )
        pedidos = (
            self.db.query(Order.rota_id, func.count(Order.id).label("total"))
            .filter(Order.rota_id.isnot(None))
            .group_by(Order.rota_id)
            .subquery()
        )
        results = (
            self.db.query(
                Route.id,
                Route.nome,
                func.coalesce(clientes.c.total, 0).label("clientes_vinculados"),
                func.coalesce(pedidos.c.total, 0).label("pedidos_vinculados"),
            )
            .outerjoin(clientes, clientes.c.rota_id == Route.id)
            .outerjoin(pedidos, pedidos.c.rota_id == Route.id)
            .order_by(Route.nome.asc())
            .all()
        )
        return [
            {
                "id": r.id,
                "nome": r.nome,
                "clientes_vinculados": int(r.clientes_vinculados),
                "pedidos_vinculados": int(r.pedidos_vinculados),
            }
            for r in results
        ]

    def get_by_nome(self, nome: str) -> Optional[Route]:
        return self.db.query(Route).filter(Route.nome == nome).first()

    def count_links(self, rota_id: int) -> int:
        clientes = self.db.query(func.count(Client.id)).filter(Client.rota_id == rota_id).scalar() or 0
        pedidos = self.db.query(func.count(Order.id)).filter(Order.rota_id == rota_id).scalar() or 0
        usuarios = self.db.query(func.count(User.id)).filter(User.rota_id == rota_id).scalar() or 0
        return clientes + pedidos + usuarios
