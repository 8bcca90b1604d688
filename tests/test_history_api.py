def test_extrato_running_balance(client, auth_headers, catalog, create_order):
    pao = catalog["pao"]["id"]
    efetivado = create_order(data="2024-01-05")
    client.put(
        f"/api/pedidos/{efetivado['id']}",
        json={"itens": [{"produto_id": pao, "quantidade": 8, "valor_unitario": 10}], "status": "EFETIVADO"},
        headers=auth_headers,
    )
    cancelado = create_order(data="2024-01-06", itens=[{"produto_id": pao, "quantidade": 5}])
    client.patch(f"/api/pedidos/{cancelado['id']}/status", json={"status": "CANCELADO"}, headers=auth_headers)
    create_order(data="2024-02-01")

    response = client.get(
        "/api/historico/extrato",
        params={"data_inicio": "2024-01-01", "data_fim": "2024-01-31"},
        headers=auth_headers,
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert [(e["pedido_id"], e["valor_movimento"], e["saldo_acumulado"]) for e in body["entries"]] == [
        (efetivado["id"], 80.0, 80.0),
        (cancelado["id"], 0.0, 80.0),
    ]
    assert body["entries"][0]["data_baixa"] == "2024-01-05"
    assert body["entries"][1]["data_baixa"] is None
    assert body["resumo"] == {"total_vendas": 130.0, "total_efetivado": 80.0, "saldo_periodo": 80.0}


def test_extrato_filters(client, auth_headers, catalog, create_order):
    pedido = create_order(data="2024-01-05")
    client.patch(f"/api/pedidos/{pedido['id']}/status", json={"status": "CANCELADO"}, headers=auth_headers)
    create_order(data="2024-01-06")
    period = {"data_inicio": "2024-01-01", "data_fim": "2024-01-31"}

    cancelled = client.get("/api/historico/extrato", params={**period, "status": "cancelado"}, headers=auth_headers)
    unknown = client.get("/api/historico/extrato", params={**period, "status": "xyz"}, headers=auth_headers)
    other_client = client.get("/api/historico/extrato", params={**period, "cliente_id": 999}, headers=auth_headers)

    assert [e["pedido_id"] for e in cancelled.json()["entries"]] == [pedido["id"]]
    assert len(unknown.json()["entries"]) == 2
    assert other_client.json()["entries"] == []
    assert other_client.json()["resumo"]["saldo_periodo"] == 0.0


def test_extrato_requires_a_valid_period(client, auth_headers):
    missing = client.get("/api/historico/extrato", params={"data_inicio": "2024-01-01"}, headers=auth_headers)
    reversed_period = client.get(
        "/api/historico/extrato",
        params={"data_inicio": "2024-02-01", "data_fim": "2024-01-01"},
        headers=auth_headers,
    )

    assert missing.status_code == 400
    assert reversed_period.status_code == 400
