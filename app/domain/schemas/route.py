"""Pydantic schemas for delivery routes (rotas)."""

from pydantic import BaseModel


class RouteCreate(BaseModel):
    nome: str


class RouteUpdate(BaseModel):
    nome: str


class RouteRead(BaseModel):
    id: int
    nome: str

    model_config = {"from_attributes": True}


class RouteWithCounts(RouteRead):
    clientes_vinculados: int = 0
    pedidos_vinculados: int = 0
