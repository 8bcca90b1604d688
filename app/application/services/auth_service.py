"""Auth service — JWT token management, password hashing and user accounts."""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

import structlog
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.exceptions import (
    ConflictException,
    EntityNotFoundException,
    UnauthorizedException,
    ValidationException,
)
from app.domain.models.route import Route
from app.domain.models.user import PERFIS, User
from app.domain.schemas.auth import UserCreate, UserUpdate

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
logger = structlog.get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
        return payload
    except JWTError:
        return None


def token_for(user: User) -> str:
    return create_access_token(
        data={
            "sub": user.login,
            "id": user.id,
            "nome": user.nome,
            "username": user.login,
            "perfil": user.perfil,
        }
    )


def authenticate_user(db: Session, login: str, password: str) -> Optional[User]:
    user = get_user_by_login(db, login)
    if not user or not verify_password(password, user.senha_hash):
        return None
    if not user.ativo:
        return None
    return user


def get_user_by_login(db: Session, login: str) -> Optional[User]:
    return db.query(User).filter(User.login == login.strip()).first()


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise EntityNotFoundException("Usuário não encontrado", details={"usuario_id": user_id})
    return user


def list_users(db: Session) -> List[User]:
    return db.query(User).order_by(User.nome.asc()).all()


def _check_perfil(perfil: str) -> str:
    perfil = (perfil or "").strip().lower()
    if perfil not in PERFIS:
        raise ValidationException(
            f"Perfil inválido. Valores permitidos: {', '.join(PERFIS)}",
            details={"perfil": perfil},
        )
    return perfil


def _check_password(senha: str) -> None:
    if not senha or len(senha) < MIN_PASSWORD_LENGTH:
        raise ValidationException(f"A senha deve ter ao menos {MIN_PASSWORD_LENGTH} caracteres")


def _check_route(db: Session, rota_id: Optional[int]) -> None:
    if rota_id is not None and db.get(Route, rota_id) is None:
        raise EntityNotFoundException("Rota não encontrada", details={"rota_id": rota_id})


def _commit(db: Session, conflict_message: str) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictException(conflict_message)


def create_user(db: Session, body: UserCreate) -> User:
    nome = body.nome.strip()
    login = body.login.strip()
    if not nome or not login:
        raise ValidationException("nome e login são obrigatórios")
    perfil = _check_perfil(body.perfil)
    _check_password(body.senha)
    _check_route(db, body.rota_id)
    if get_user_by_login(db, login) is not None:
        raise ConflictException("Login já cadastrado", details={"login": login})

    user = User(
        nome=nome,
        login=login,
        senha_hash=hash_password(body.senha),
        perfil=perfil,
        rota_id=body.rota_id,
        ativo=body.ativo,
    )
    db.add(user)
    _commit(db, "Login já cadastrado")
    db.refresh(user)
    logger.info("User created", usuario_id=user.id, login=login, perfil=perfil)
    return user


def update_user(db: Session, user_id: int, body: UserUpdate) -> User:
    user = get_user(db, user_id)
    changes = body.model_dump(exclude_unset=True)

    if "nome" in changes:
        if not changes["nome"] or not changes["nome"].strip():
            raise ValidationException("nome não pode ser vazio")
        user.nome = changes["nome"].strip()
    if changes.get("perfil") is not None:
        user.perfil = _check_perfil(changes["perfil"])
    if "rota_id" in changes:
        _check_route(db, changes["rota_id"])
        user.rota_id = changes["rota_id"]
    if changes.get("ativo") is not None:
        user.ativo = changes["ativo"]
    if changes.get("senha"):
        _check_password(changes["senha"])
        user.senha_hash = hash_password(changes["senha"])

    _commit(db, "Não foi possível atualizar o usuário")
    db.refresh(user)
    logger.info("User updated", usuario_id=user.id, campos=sorted(changes))
    return user


def delete_user(db: Session, user_id: int, current_user: User) -> None:
    user = get_user(db, user_id)
    if user.id == current_user.id:
        raise ConflictException("Você não pode excluir o próprio usuário")
    db.delete(user)
    _commit(db, "Usuário possui registros vinculados e não pode ser excluído")
    logger.info("User deleted", usuario_id=user_id)


def change_password(db: Session, user: User, senha_atual: str, nova_senha: str) -> None:
    if not verify_password(senha_atual, user.senha_hash):
        raise UnauthorizedException("Senha atual incorreta")
    _check_password(nova_senha)
    user.senha_hash = hash_password(nova_senha)
    _commit(db, "Não foi possível alterar a senha")
    logger.info("Password changed", usuario_id=user.id)


def ensure_default_admin(db: Session) -> User:
    """Create the configured admin account, or reset it to the configured values."""
    login = settings.AUTH_USER.strip()
    user = get_user_by_login(db, login)
    if user is None:
        user = User(
            nome=settings.AUTH_NAME,
            login=login,
            senha_hash=hash_password(settings.AUTH_PASSWORD),
            perfil="admin",
            ativo=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Default admin user created", login=login)
        return user

    user.nome = settings.AUTH_NAME
    user.perfil = "admin"
    user.ativo = True
    if not verify_password(settings.AUTH_PASSWORD, user.senha_hash):
        user.senha_hash = hash_password(settings.AUTH_PASSWORD)
    db.commit()
    db.refresh(user)
    logger.info("Default admin user verified", login=login)
    return user
