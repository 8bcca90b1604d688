"""FastAPI dependency — JWT auth and profile checks."""

from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.application.services.auth_service import decode_access_token
from app.core.exceptions import ForbiddenException, UnauthorizedException
from app.domain.models.user import User
from app.infrastructure.database import get_db

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Extract and validate the current user from JWT token."""
    if credentials is None:
        raise UnauthorizedException("Token não informado")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedException("Token inválido ou expirado")

    login: str = payload.get("sub")
    if login is None:
        raise UnauthorizedException("Token inválido")

    user = db.query(User).filter(User.login == login).first()
    if user is None or not user.ativo:
        raise UnauthorizedException("Usuário não encontrado ou inativo")

    return user


def require_roles(*perfis: str) -> Callable[..., User]:
    """Dependency factory: the current user must have one of ``perfis``."""

    def dependency(user: User = Depends(get_current_user)) -> User:
        if user.perfil not in perfis:
            raise ForbiddenException(
                "Seu perfil não tem acesso a este recurso",
                details={"perfil": user.perfil, "permitidos": list(perfis)},
            )
        return user

    return dependency


require_admin = require_roles("admin")
can_manage_cadastros = require_roles("admin", "backoffice")
can_reorder_remaneio = require_roles("admin", "backoffice", "motorista")
