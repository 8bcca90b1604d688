def test_override_lifecycle(client, auth_headers, catalog):
    cliente_id = catalog["cliente"]["id"]
    pao_id = catalog["pao"]["id"]

    created = client.post(
        "/api/cliente-produtos",
        json={"cliente_id": cliente_id, "produto_id": pao_id, "valor_unitario": "12.00"},
        headers=auth_headers,
    )
    assert created.status_code == 201, created.text
    vinculo = created.json()
    assert vinculo["valor_unitario"] == 12.0
    assert vinculo["produto_nome"] == "Pão de Forma"

    duplicate = client.post(
        "/api/cliente-produtos",
        json={"cliente_id": cliente_id, "produto_id": pao_id, "valor_unitario": "9.00"},
        headers=auth_headers,
    )
    assert duplicate.status_code == 409

    listed = client.get(f"/api/clientes/{cliente_id}/produtos", headers=auth_headers).json()
    assert [v["id"] for v in listed] == [vinculo["id"]]
    assert client.get("/api/cliente-produtos", params={"cliente_id": 999}, headers=auth_headers).json() == []

    zeroed = client.patch(f"/api/cliente-produtos/{vinculo['id']}", json={"valor_unitario": 0}, headers=auth_headers)
    assert zeroed.status_code == 200
    assert zeroed.json()["valor_unitario"] == 0.0

    assert client.delete(f"/api/cliente-produtos/{vinculo['id']}", headers=auth_headers).status_code == 204
    assert client.delete(f"/api/cliente-produtos/{vinculo['id']}", headers=auth_headers).status_code == 404


def test_override_validation(client, auth_headers, catalog):
    cliente_id = catalog["cliente"]["id"]
    pao_id = catalog["pao"]["id"]

    def post(body):
        return client.post("/api/cliente-produtos", json=body, headers=auth_headers).status_code

    assert post({"cliente_id": cliente_id, "produto_id": pao_id, "valor_unitario": 0}) == 400
    assert post({"cliente_id": cliente_id, "produto_id": pao_id}) == 400
    assert post({"cliente_id": 999, "produto_id": pao_id, "valor_unitario": 1}) == 404
    assert post({"cliente_id": cliente_id, "produto_id": 999, "valor_unitario": 1}) == 404


def test_negative_price_on_update_is_rejected(client, auth_headers, catalog):
    vinculo = client.post(
        "/api/cliente-produtos",
        json={"cliente_id": catalog["cliente"]["id"], "produto_id": catalog["pao"]["id"], "valor_unitario": 5},
        headers=auth_headers,
    ).json()

    response = client.patch(f"/api/cliente-produtos/{vinculo['id']}", json={"valor_unitario": -1}, headers=auth_headers)

    assert response.status_code == 400


def test_resolved_price_reports_origin(client, auth_headers, catalog):
    cliente_id = catalog["cliente"]["id"]
    client.post(
        "/api/cliente-produtos",
        json={"cliente_id": cliente_id, "produto_id": catalog["pao"]["id"], "valor_unitario": "12.00"},
        headers=auth_headers,
    )
    sem_preco = client.post("/api/produtos", json={"nome": "Sonho"}, headers=auth_headers).json()

    def price(produto_id):
        return client.get(f"/api/clientes/{cliente_id}/produtos/{produto_id}/preco", headers=auth_headers)

    assert price(catalog["pao"]["id"]).json()["valor_unitario"] == 12.0
    assert price(catalog["pao"]["id"]).json()["origem"] == "vinculo"
    assert price(catalog["bolo"]["id"]).json()["origem"] == "produto"
    assert price(sem_preco["id"]).json() == {
        "cliente_id": cliente_id,
        "produto_id": sem_preco["id"],
        "valor_unitario": None,
        "origem": None,
    }
    assert price(999).status_code == 404


def test_vendedor_cannot_manage_overrides(client, make_user, catalog):
    headers = make_user("vendedor1", "vendedor")

    response = client.post(
        "/api/cliente-produtos",
        json={"cliente_id": catalog["cliente"]["id"], "produto_id": catalog["pao"]["id"], "valor_unitario": 1},
        headers=headers,
    )

    assert response.status_code == 403
    assert client.get("/api/cliente-produtos", headers=headers).status_code == 200


def test_price_below_stored_places_is_not_saved_as_zero(client, auth_headers, catalog):
    cliente_id = catalog["cliente"]["id"]
    pao_id = catalog["pao"]["id"]

    tiny = client.post(
        "/api/cliente-produtos",
        json={"cliente_id": cliente_id, "produto_id": pao_id, "valor_unitario": "0.00001"},
        headers=auth_headers,
    )
    assert tiny.status_code == 400
    assert "4 casas decimais" in tiny.json()["error"]["message"]
    assert client.get(f"/api/clientes/{cliente_id}/produtos", headers=auth_headers).json() == []

    vinculo = client.post(
        "/api/cliente-produtos",
        json={"cliente_id": cliente_id, "produto_id": pao_id, "valor_unitario": "0.0001"},
        headers=auth_headers,
    ).json()
    assert vinculo["valor_unitario"] == 0.0001

    patched = client.patch(
        f"/api/cliente-produtos/{vinculo['id']}", json={"valor_unitario": "1.23456"}, headers=auth_headers
    )
    assert patched.status_code == 400

    preco = client.get(f"/api/clientes/{cliente_id}/produtos/{pao_id}/preco", headers=auth_headers).json()
    assert preco["valor_unitario"] == 0.0001
