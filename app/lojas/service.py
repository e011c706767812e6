"""
Clausonus - Serviço de lojas
Regras de negócio do cadastro de lojas (unicidade de CNPJ, existência)
"""

from __future__ import annotations

import structlog
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import BusinessError, NotFoundError
from app.core.infrastructure import get_db_session
from app.core.models import CnpjCheckResponse, Loja, LojaDTO
from app.lojas.repository import LojaRepository

logger = structlog.get_logger()

# Lojas de exemplo carregadas no ambiente de desenvolvimento
DADOS_INICIAIS = [
    Loja(
        nome="Loja Central",
        endereco="Av. Paulista, 1000, São Paulo - SP",
        cnpj="12.345.678/0001-01",
        telefone="(11) 3456-7890",
    ),
    Loja(
        nome="Loja Shopping",
        endereco="Shopping Center Norte, São Paulo - SP",
        cnpj="23.456.789/0001-02",
        telefone="(11) 4567-8901",
    ),
    Loja(
        nome="Loja Guarulhos",
        endereco="Av. Tiradentes, 2000, Guarulhos - SP",
        cnpj="34.567.890/0001-03",
        telefone="(11) 5678-9012",
    ),
]


class LojaService:
    """Gerenciamento de lojas"""

    def __init__(self, repository: LojaRepository | None = None, session_factory=get_db_session):
        self.repository = repository or LojaRepository()
        self._session = session_factory

    async def listar_todas(self) -> list[LojaDTO]:
        logger.info("Listing stores")
        async with self._session() as session:
            lojas = await self.repository.listar_todas(session)
        return [loja.to_dto() for loja in lojas]

    async def buscar_por_id(self, loja_id: int) -> LojaDTO:
        logger.info("Fetching store", loja_id=loja_id)
        async with self._session() as session:
            loja = await self.repository.buscar_por_id(session, loja_id)
        if loja is None:
            raise NotFoundError(f"Loja não encontrada com o ID: {loja_id}")
        return loja.to_dto()

    async def buscar_por_nome(self, nome: str) -> list[LojaDTO]:
        logger.info("Searching stores by name", nome=nome)
        async with self._session() as session:
            lojas = await self.repository.buscar_por_nome(session, nome)
        return [loja.to_dto() for loja in lojas]

    async def buscar_por_cnpj(self, cnpj: str) -> LojaDTO | None:
        logger.info("Fetching store by CNPJ", cnpj=cnpj)
        async with self._session() as session:
            loja = await self.repository.buscar_por_cnpj(session, cnpj)
        return loja.to_dto() if loja else None

    async def verificar_cnpj(self, cnpj: str) -> CnpjCheckResponse:
        loja = await self.buscar_por_cnpj(cnpj)
        if loja:
            return CnpjCheckResponse(
                exists=True,
                message=f"CNPJ já cadastrado para a loja: {loja.nome}",
            )
        return CnpjCheckResponse(exists=False, message="CNPJ disponível para cadastro")

    async def salvar(self, dto: LojaDTO) -> LojaDTO:
        logger.info("Saving store", cnpj=dto.cnpj, nome=dto.nome)
        try:
            async with self._session() as session:
                if await self.repository.buscar_por_cnpj(session, dto.cnpj):
                    raise BusinessError(f"Já existe uma loja cadastrada com o CNPJ: {dto.cnpj}")
                loja = await self.repository.inserir(session, Loja.from_dto(dto))
        except IntegrityError as e:
            # Outra requisição gravou o mesmo CNPJ entre a consulta e o INSERT
            logger.warning("Store unique constraint violated", cnpj=dto.cnpj, error=str(e.orig))
            raise BusinessError(f"Já existe uma loja cadastrada com o CNPJ: {dto.cnpj}") from e
        return loja.to_dto()

    async def atualizar(self, loja_id: int, dto: LojaDTO) -> LojaDTO:
        logger.info("Updating store", loja_id=loja_id, cnpj=dto.cnpj)
        try:
            async with self._session() as session:
                loja = await self.repository.buscar_por_id(session, loja_id)
                if loja is None:
                    raise NotFoundError(f"Loja não encontrada com o ID: {loja_id}")

                if loja.cnpj != dto.cnpj:
                    existente = await self.repository.buscar_por_cnpj(session, dto.cnpj)
                    if existente and existente.id != loja_id:
                        raise BusinessError(f"Já existe uma loja cadastrada com o CNPJ: {dto.cnpj}")

                loja.update_from_dto(dto)
                await self.repository.atualizar(session, loja)
        except IntegrityError as e:
            logger.warning("Store unique constraint violated", loja_id=loja_id, cnpj=dto.cnpj, error=str(e.orig))
            raise BusinessError(f"Já existe uma loja cadastrada com o CNPJ: {dto.cnpj}") from e
        return loja.to_dto()

    async def excluir(self, loja_id: int) -> bool:
        logger.info("Deleting store", loja_id=loja_id)
        async with self._session() as session:
            if await self.repository.buscar_por_id(session, loja_id) is None:
                raise NotFoundError(f"Loja não encontrada com o ID: {loja_id}")
            return await self.repository.deletar(session, loja_id)

    async def carregar_dados_iniciais(self) -> int:
        """Insere as lojas de exemplo se a tabela estiver vazia; retorna quantas foram inseridas"""
        async with self._session() as session:
            if await self.repository.contar(session) > 0:
                return 0
            logger.info("Inserting sample stores", count=len(DADOS_INICIAIS))
            for loja in DADOS_INICIAIS:
                await self.repository.inserir(session, loja.model_copy())
        return len(DADOS_INICIAIS)


# Singleton
loja_service = LojaService()
