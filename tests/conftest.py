import os
import tempfile
from pathlib import Path

# The engine is built from settings at import time
_DB_DIR = Path(tempfile.mkdtemp(prefix="appemp-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+pysqlite:///{_DB_DIR / 'test.sqlite'}"
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("AUTH_USER", "admin")
os.environ.setdefault("AUTH_PASSWORD", "admin123")

import pytest
from fastapi.testclient import TestClient

from app.infrastructure.database import Base, SessionLocal, engine


@pytest.fixture(autouse=True)
def reset_database():
    import app.main  # noqa: F401  registers every model on Base.metadata

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def client():
    from app.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def login(client: TestClient, username: str, password: str) -> dict:
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture()
def auth_headers(client):
    return login(client, "admin", "admin123")


@pytest.fixture()
def make_user(client, auth_headers):
    def _make(login_name: str, perfil: str, senha: str = "segredo1") -> dict:
        response = client.post(
            "/api/usuarios",
            json={"nome": login_name.title(), "login": login_name, "senha": senha, "perfil": perfil},
            headers=auth_headers,
        )
        assert response.status_code == 201, response.text
        return login(client, login_name, senha)

    return _make


@pytest.fixture()
def catalog(client, auth_headers):
    """One route, one client and two products (base prices 10.00 and 4.00)."""
    rota = client.post("/api/rotas", json={"nome": "Centro"}, headers=auth_headers).json()
    cliente = client.post(
        "/api/clientes",
        json={"codigo_cliente": "C001", "nome": "Mercado Bom Preço", "rota_id": rota["id"]},
        headers=auth_headers,
    ).json()
    pao = client.post(
        "/api/produtos",
        json={"codigo_produto": "P001", "nome": "Pão de Forma", "embalagem": "UN", "preco_base": "10.00"},
        headers=auth_headers,
    ).json()
    bolo = client.post(
        "/api/produtos",
        json={"codigo_produto": "P002", "nome": "Bolo", "embalagem": "UN", "preco_base": "4.00"},
        headers=auth_headers,
    ).json()
    return {"rota": rota, "cliente": cliente, "pao": pao, "bolo": bolo}


@pytest.fixture()
def create_order(client, auth_headers, catalog):
    def _create(itens=None, data="2024-01-05", status=None, expected=201, **extra) -> dict:
        body = {
            "cliente_id": catalog["cliente"]["id"],
            "rota_id": catalog["rota"]["id"],
            "data": data,
            "itens": itens
            if itens is not None
            else [{"produto_id": catalog["pao"]["id"], "quantidade": 3, "valor_unitario": 15.5}],
            **extra,
        }
        if status is not None:
            body["status"] = status
        response = client.post("/api/pedidos", json=body, headers=auth_headers)
        assert response.status_code == expected, response.text
        return response.json()

    return _create
