"""Pydantic schemas for Product domain."""

from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.domain.schemas.common import Money


class ProductCreate(BaseModel):
    codigo_produto: Optional[str] = None
    nome: str
    embalagem: Optional[str] = None
    preco_base: Optional[Decimal] = None


class ProductUpdate(BaseModel):
    codigo_produto: Optional[str] = None
    nome: Optional[str] = None
    embalagem: Optional[str] = None
    preco_base: Optional[Decimal] = None
    ativo: Optional[bool] = None


class ProductRead(BaseModel):
    id: int
    codigo_produto: str
    nome: str
    embalagem: Optional[str] = None
    preco_base: Optional[Money] = None
    ativo: bool = True
    criado_em: Optional[datetime] = None

    model_config = {"from_attributes": True}
