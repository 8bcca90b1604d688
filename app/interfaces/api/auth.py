"""Auth API routes — login, me, change password."""

import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.infrastructure.database import get_db
from app.application.services.auth_service import authenticate_user, change_password, token_for
from app.core.exceptions import UnauthorizedException
from app.domain.schemas.auth import ChangePasswordRequest, LoginRequest, TokenResponse, UserRead
from app.interfaces.api.deps import get_current_user
from app.domain.models.user import User

router = APIRouter(prefix="/api/auth", tags=["Auth"])
logger = structlog.get_logger(__name__)


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate_user(db, body.username, body.password)
    if not user:
        logger.warning("Login failed", username=body.username)
        raise UnauthorizedException("Usuário ou senha incorretos")

    return TokenResponse(
        token=token_for(user),
        user=UserRead.model_validate(user),
    )


@router.get("/me", response_model=UserRead)
def get_me(user: User = Depends(get_current_user)):
    return UserRead.model_validate(user)


@router.post("/change-password", status_code=status.HTTP_204_NO_CONTENT)
def update_password(
    body: ChangePasswordRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    change_password(db, user, body.senha_atual, body.nova_senha)
