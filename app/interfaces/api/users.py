"""User API routes — account management (admin only)."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.infrastructure.database import get_db
from app.application.services.auth_service import create_user, delete_user, list_users, update_user
from app.domain.models.user import User
from app.domain.schemas.auth import UserCreate, UserRead, UserUpdate
from app.interfaces.api.deps import require_admin

router = APIRouter(prefix="/api/usuarios", tags=["Usuários"])


@router.get("")
def get_users(
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    return [UserRead.model_validate(u) for u in list_users(db)]


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def add_user(
    body: UserCreate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    return UserRead.model_validate(create_user(db, body))


@router.patch("/{usuario_id}", response_model=UserRead)
def edit_user(
    usuario_id: int,
    body: UserUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    return UserRead.model_validate(update_user(db, usuario_id, body))


@router.delete("/{usuario_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_user(
    usuario_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(require_admin),
):
    delete_user(db, usuario_id, user)
