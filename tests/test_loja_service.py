"""
LojaService com repositório mockado
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import BusinessError, NotFoundError
from app.core.models import Loja
from app.lojas.repository import LojaRepository
from app.lojas.service import DADOS_INICIAIS, LojaService


@pytest.fixture
def repository():
    repo = AsyncMock(spec=LojaRepository)
    repo.buscar_por_cnpj.return_value = None
    return repo


@pytest.fixture
def service(repository, fake_session):
    return LojaService(repository=repository, session_factory=fake_session)


def _violacao_unique() -> IntegrityError:
    return IntegrityError("INSERT INTO ...", {}, Exception("UNIQUE constraint failed"))


class TestConsultas:
    @pytest.mark.asyncio
    async def test_listar_todas(self, service, repository, sample_loja):
        repository.listar_todas.return_value = [sample_loja]
        result = await service.listar_todas()
        assert [l.nome for l in result] == ["Loja Central"]

    @pytest.mark.asyncio
    async def test_buscar_por_id_not_found(self, service, repository):
        repository.buscar_por_id.return_value = None
        with pytest.raises(NotFoundError, match="Loja não encontrada com o ID: 7"):
            await service.buscar_por_id(7)

    @pytest.mark.asyncio
    async def test_verificar_cnpj(self, service, repository, sample_loja):
        repository.buscar_por_cnpj.return_value = sample_loja
        result = await service.verificar_cnpj(sample_loja.cnpj)
        assert result.exists is True
        assert "Loja Central" in result.message

        repository.buscar_por_cnpj.return_value = None
        result = await service.verificar_cnpj("99.999.999/0001-99")
        assert result.exists is False


class TestSalvar:
    @pytest.mark.asyncio
    async def test_salvar(self, service, repository, loja_dto):
        async def inserir(session, loja):
            loja.id = 5
            return loja
        repository.inserir.side_effect = inserir

        result = await service.salvar(loja_dto)
        assert result.id == 5
        assert result.cnpj == loja_dto.cnpj

    @pytest.mark.asyncio
    async def test_duplicate_cnpj(self, service, repository, loja_dto, sample_loja):
        repository.buscar_por_cnpj.return_value = sample_loja
        with pytest.raises(BusinessError, match="CNPJ"):
            await service.salvar(loja_dto)
        repository.inserir.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_insert_of_same_cnpj(self, service, repository, loja_dto):
        # A consulta não encontrou o CNPJ, mas outra transação o gravou antes do INSERT
        repository.inserir.side_effect = _violacao_unique()
        with pytest.raises(BusinessError, match="Já existe uma loja cadastrada com o CNPJ"):
            await service.salvar(loja_dto)


class TestAtualizar:
    @pytest.mark.asyncio
    async def test_atualizar_same_cnpj(self, service, repository, sample_loja):
        repository.buscar_por_id.return_value = sample_loja
        dto = sample_loja.to_dto()
        dto.nome = "Loja Central Renovada"

        result = await service.atualizar(1, dto)

        assert result.nome == "Loja Central Renovada"
        repository.buscar_por_cnpj.assert_not_called()

    @pytest.mark.asyncio
    async def test_cnpj_taken_by_other(self, service, repository, sample_loja, loja_dto):
        repository.buscar_por_id.return_value = sample_loja
        repository.buscar_por_cnpj.return_value = Loja(
            id=2, nome="Outra", endereco="Rua X", cnpj=loja_dto.cnpj,
        )
        with pytest.raises(BusinessError):
            await service.atualizar(1, loja_dto)
        repository.atualizar.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_found(self, service, repository, loja_dto):
        repository.buscar_por_id.return_value = None
        with pytest.raises(NotFoundError):
            await service.atualizar(1, loja_dto)

    @pytest.mark.asyncio
    async def test_concurrent_update_to_taken_cnpj(self, service, repository, sample_loja, loja_dto):
        repository.buscar_por_id.return_value = sample_loja
        repository.atualizar.side_effect = _violacao_unique()
        with pytest.raises(BusinessError, match="CNPJ"):
            await service.atualizar(1, loja_dto)


class TestDadosIniciais:
    @pytest.mark.asyncio
    async def test_seeds_empty_table(self, service, repository):
        repository.contar.return_value = 0
        assert await service.carregar_dados_iniciais() == len(DADOS_INICIAIS)
        assert repository.inserir.await_count == len(DADOS_INICIAIS)

    @pytest.mark.asyncio
    async def test_skips_when_not_empty(self, service, repository):
        repository.contar.return_value = 2
        assert await service.carregar_dados_iniciais() == 0
        repository.inserir.assert_not_called()
