"""Pydantic schemas for User and Auth."""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class UserCreate(BaseModel):
    nome: str
    login: str
    senha: str
    perfil: str
    rota_id: Optional[int] = None
    ativo: bool = True


class UserUpdate(BaseModel):
    nome: Optional[str] = None
    perfil: Optional[str] = None
    rota_id: Optional[int] = None
    ativo: Optional[bool] = None
    senha: Optional[str] = None


class UserRead(BaseModel):
    id: int
    nome: str
    username: str = Field(validation_alias="login")
    perfil: str
    rota_id: Optional[int] = None
    ativo: bool
    criado_em: Optional[datetime] = None

    model_config = {"from_attributes": True, "populate_by_name": True}


class LoginRequest(BaseModel):
    username: str
    password: str


class ChangePasswordRequest(BaseModel):
    senha_atual: str
    nova_senha: str


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserRead
