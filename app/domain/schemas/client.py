"""Pydantic schemas for Client domain."""

from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class ClientBase(BaseModel):
    codigo_cliente: str
    nome: str
    rota_id: Optional[int] = None
    link: Optional[str] = None


class ClientCreate(ClientBase):
    pass


class ClientUpdate(BaseModel):
    nome: Optional[str] = None
    rota_id: Optional[int] = None
    ativo: Optional[bool] = None
    link: Optional[str] = None


class ClientRead(ClientBase):
    id: int
    ativo: bool = True
    criado_em: Optional[datetime] = None

    model_config = {"from_attributes": True}
