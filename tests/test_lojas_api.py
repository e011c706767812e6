"""
API de lojas sobre banco SQLite temporário
"""

from unittest.mock import AsyncMock

from app.lojas.service import loja_service


def _criar(client, payload) -> dict:
    response = client.post("/api/lojas", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestCriarLoja:
    def test_create_returns_location(self, client, loja_payload):
        response = client.post("/api/lojas", json=loja_payload)
        assert response.status_code == 201
        body = response.json()
        assert body["id"] is not None
        assert body["cnpj"] == loja_payload["cnpj"]
        assert response.headers["location"] == f"/api/lojas/{body['id']}"

    def test_duplicate_cnpj_is_400(self, client, loja_payload):
        _criar(client, loja_payload)
        response = client.post("/api/lojas", json={**loja_payload, "nome": "Outra"})
        assert response.status_code == 400
        assert "Já existe uma loja cadastrada com o CNPJ" in response.json()["message"]

    def test_unique_constraint_race_is_400(self, client, loja_payload, monkeypatch):
        _criar(client, loja_payload)
        # Simula a requisição concorrente que consultou antes do primeiro INSERT
        monkeypatch.setattr(loja_service.repository, "buscar_por_cnpj", AsyncMock(return_value=None))
        response = client.post("/api/lojas", json={**loja_payload, "nome": "Outra"})
        assert response.status_code == 400
        assert response.json()["developer_message"] == "Erro de negócio"
        assert len(client.get("/api/lojas").json()) == 1

    def test_invalid_cnpj_is_400(self, client, loja_payload):
        response = client.post("/api/lojas", json={**loja_payload, "cnpj": "123"})
        assert response.status_code == 400
        assert "CNPJ inválido" in response.json()["message"]


class TestConsultarLoja:
    def test_list_and_get(self, client, loja_payload):
        criada = _criar(client, loja_payload)

        lista = client.get("/api/lojas").json()
        assert [l["id"] for l in lista] == [criada["id"]]

        response = client.get(f"/api/lojas/{criada['id']}")
        assert response.status_code == 200
        assert response.json()["nome"] == "Loja Teste"

    def test_get_missing_is_404(self, client):
        response = client.get("/api/lojas/999")
        assert response.status_code == 404
        assert response.json()["message"] == "Loja não encontrada com o ID: 999"

    def test_search_by_name(self, client, loja_payload):
        _criar(client, loja_payload)
        _criar(client, {**loja_payload, "nome": "Outra Filial", "cnpj": "56.789.012/0001-05"})

        nomes = [l["nome"] for l in client.get("/api/lojas/busca", params={"nome": "Teste"}).json()]
        assert nomes == ["Loja Teste"]

    def test_by_cnpj_with_slash(self, client, loja_payload):
        _criar(client, loja_payload)
        response = client.get(f"/api/lojas/cnpj/{loja_payload['cnpj']}")
        assert response.status_code == 200
        assert response.json()["nome"] == "Loja Teste"

        assert client.get("/api/lojas/cnpj/00.000.000/0000-00").status_code == 404

    def test_verificar_cnpj(self, client, loja_payload):
        livre = client.get(f"/api/lojas/verificar-cnpj/{loja_payload['cnpj']}").json()
        assert livre == {"exists": False, "message": "CNPJ disponível para cadastro"}

        _criar(client, loja_payload)
        usado = client.get(f"/api/lojas/verificar-cnpj/{loja_payload['cnpj']}").json()
        assert usado["exists"] is True
        assert "Loja Teste" in usado["message"]


class TestAlterarLoja:
    def test_update(self, client, loja_payload):
        criada = _criar(client, loja_payload)
        response = client.put(
            f"/api/lojas/{criada['id']}",
            json={**loja_payload, "telefone": "(19) 9999-0000"},
        )
        assert response.status_code == 200
        assert response.json()["telefone"] == "(19) 9999-0000"

    def test_update_to_taken_cnpj_is_400(self, client, loja_payload):
        _criar(client, loja_payload)
        outra = _criar(client, {**loja_payload, "cnpj": "56.789.012/0001-05"})
        response = client.put(f"/api/lojas/{outra['id']}", json=loja_payload)
        assert response.status_code == 400

    def test_update_missing_is_404(self, client, loja_payload):
        assert client.put("/api/lojas/999", json=loja_payload).status_code == 404

    def test_delete(self, client, loja_payload):
        criada = _criar(client, loja_payload)
        assert client.delete(f"/api/lojas/{criada['id']}").status_code == 204
        assert client.get(f"/api/lojas/{criada['id']}").status_code == 404
        assert client.delete(f"/api/lojas/{criada['id']}").status_code == 404


class TestDadosIniciais:
    def test_seed_runs_once(self, client):
        assert client.get("/api/lojas").json() == []
        assert client.portal.call(loja_service.carregar_dados_iniciais) == 3
        assert client.portal.call(loja_service.carregar_dados_iniciais) == 0
        nomes = [l["nome"] for l in client.get("/api/lojas").json()]
        assert nomes == ["Loja Central", "Loja Shopping", "Loja Guarulhos"]
