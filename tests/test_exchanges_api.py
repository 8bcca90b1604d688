def test_exchanges_are_recorded_on_any_status(client, auth_headers, catalog, create_order):
    pedido = create_order()
    client.patch(f"/api/pedidos/{pedido['id']}/status", json={"status": "EFETIVADO"}, headers=auth_headers)

    for produto in (catalog["pao"], catalog["bolo"], catalog["pao"]):
        response = client.post(
            "/api/trocas",
            json={"pedido_id": pedido["id"], "produto_id": produto["id"], "quantidade": 1, "motivo": " vencido "},
            headers=auth_headers,
        )
        assert response.status_code == 201, response.text

    trocas = client.get(f"/api/pedidos/{pedido['id']}/trocas", headers=auth_headers).json()
    current = client.get(f"/api/pedidos/{pedido['id']}", headers=auth_headers).json()

    assert len(trocas) == 3
    assert trocas[0]["id"] > trocas[-1]["id"]
    assert trocas[0]["valor_troca"] == 0.0
    assert trocas[0]["motivo"] == "vencido"
    assert current["tem_trocas"] is True
    assert current["qtd_trocas"] == 3
    assert current["nomes_trocas"] == "Bolo, Pão de Forma"


def test_invalid_exchanges(client, auth_headers, catalog, create_order):
    pedido = create_order()
    other = create_order()
    base = {"pedido_id": pedido["id"], "produto_id": catalog["pao"]["id"], "quantidade": 1}

    cases = [
        ({**base, "quantidade": 0}, 400),
        ({**base, "valor_troca": -5}, 400),
        ({**base, "quantidade": "1.2345"}, 400),
        ({**base, "valor_troca": "0.00001"}, 400),
        ({**base, "pedido_id": 999}, 404),
        ({**base, "produto_id": 999}, 404),
        ({**base, "item_pedido_id": other["itens"][0]["id"]}, 400),
    ]
    for body, expected in cases:
        response = client.post("/api/trocas", json=body, headers=auth_headers)
        assert response.status_code == expected, (body, response.text)

    assert client.get(f"/api/pedidos/{pedido['id']}/trocas", headers=auth_headers).json() == []


def test_delete_exchange(client, auth_headers, catalog, create_order):
    pedido = create_order()
    troca = client.post(
        "/api/trocas",
        json={"pedido_id": pedido["id"], "produto_id": catalog["bolo"]["id"], "quantidade": 2, "valor_troca": 8},
        headers=auth_headers,
    ).json()

    assert client.delete(f"/api/trocas/{troca['id']}", headers=auth_headers).status_code == 204
    assert client.delete(f"/api/trocas/{troca['id']}", headers=auth_headers).status_code == 404
    assert client.get(f"/api/pedidos/{pedido['id']}", headers=auth_headers).json()["tem_trocas"] is False


def test_replacing_items_detaches_exchanges(client, auth_headers, catalog, create_order):
    pedido = create_order()
    item_id = pedido["itens"][0]["id"]
    client.post(
        "/api/trocas",
        json={
            "pedido_id": pedido["id"],
            "produto_id": catalog["pao"]["id"],
            "quantidade": 1,
            "item_pedido_id": item_id,
        },
        headers=auth_headers,
    )

    response = client.put(
        f"/api/pedidos/{pedido['id']}",
        json={"itens": [{"produto_id": catalog["bolo"]["id"], "quantidade": 5}]},
        headers=auth_headers,
    )

    assert response.status_code == 200, response.text
    assert response.json()["valor_total"] == 20.0
    trocas = client.get(f"/api/pedidos/{pedido['id']}/trocas", headers=auth_headers).json()
    assert trocas[0]["item_pedido_id"] is None


def test_exchanges_of_unknown_order(client, auth_headers):
    assert client.get("/api/pedidos/999/trocas", headers=auth_headers).status_code == 404
