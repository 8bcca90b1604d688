def seed(client, auth_headers, catalog, create_order):
    pao, bolo = catalog["pao"]["id"], catalog["bolo"]["id"]
    first = create_order(
        data="2024-01-05",
        itens=[{"produto_id": pao, "quantidade": 3}, {"produto_id": bolo, "quantidade": 1}],
    )
    second = create_order(data="2024-01-10", itens=[{"produto_id": pao, "quantidade": 2}])
    client.patch(f"/api/pedidos/{second['id']}/status", json={"status": "EFETIVADO"}, headers=auth_headers)
    client.post(
        "/api/trocas",
        json={"pedido_id": first["id"], "produto_id": bolo, "quantidade": 1, "valor_troca": 4},
        headers=auth_headers,
    )
    return first, second


def test_production_report(client, auth_headers, catalog, create_order):
    seed(client, auth_headers, catalog, create_order)

    rows = client.get("/api/relatorios/producao", headers=auth_headers).json()
    effective = client.get("/api/relatorios/producao", params={"status": "ok"}, headers=auth_headers).json()
    january_5 = client.get(
        "/api/relatorios/producao",
        params={"data_inicio": "2024-01-05", "data_fim": "2024-01-05"},
        headers=auth_headers,
    ).json()

    assert [(r["produto_nome"], r["quantidade_total"]) for r in rows] == [("Bolo", 1.0), ("Pão de Forma", 5.0)]
    assert [(r["produto_nome"], r["quantidade_total"]) for r in effective] == [("Pão de Forma", 2.0)]
    assert [(r["produto_nome"], r["quantidade_total"]) for r in january_5] == [("Bolo", 1.0), ("Pão de Forma", 3.0)]


def test_routes_and_top_clients(client, auth_headers, catalog, create_order):
    seed(client, auth_headers, catalog, create_order)
    client.post("/api/clientes", json={"codigo_cliente": "C009", "nome": "Sem Pedido"}, headers=auth_headers)

    rotas = client.get("/api/relatorios/rotas", headers=auth_headers).json()
    top = client.get("/api/relatorios/top-clientes", headers=auth_headers).json()

    assert [(r["rota_nome"], r["cliente_nome"], r["total_pedidos"]) for r in rotas] == [
        ("Centro", "Mercado Bom Preço", 2),
        ("Sem rota", "Sem Pedido", 0),
    ]
    assert rotas[0]["valor_total_pedidos"] == 54.0
    assert rotas[1]["rota_id"] == 0
    assert len(top) == 1
    assert top[0]["valor_total_vendas"] == 54.0


def test_exchanges_report(client, auth_headers, catalog, create_order):
    first, _ = seed(client, auth_headers, catalog, create_order)

    rows = client.get("/api/relatorios/trocas", headers=auth_headers).json()

    assert len(rows) == 1
    assert rows[0]["pedido_id"] == first["id"]
    assert rows[0]["produto_nome"] == "Bolo"
    assert rows[0]["valor_troca"] == 4.0
    assert rows[0]["rota_nome"] == "Centro"


def test_report_parameters_are_validated(client, auth_headers):
    bad_status = client.get("/api/relatorios/producao", params={"status": "entregue"}, headers=auth_headers)
    reversed_period = client.get(
        "/api/relatorios/rotas",
        params={"data_inicio": "2024-02-01", "data_fim": "2024-01-01"},
        headers=auth_headers,
    )
    bad_date = client.get("/api/relatorios/trocas", params={"data_inicio": "01/02/2024"}, headers=auth_headers)

    assert bad_status.status_code == 400
    assert reversed_period.status_code == 400
    assert bad_date.status_code == 400
