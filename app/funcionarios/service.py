"""
Clausonus - Serviço de funcionários
Cadastro de funcionários: unicidade de CPF e login, gestão de credenciais
"""

from __future__ import annotations

import structlog
from sqlalchemy.exc import IntegrityError

from app.auth.password import hash_password, verify_password
from app.core.exceptions import BusinessError, NotFoundError
from app.core.infrastructure import get_db_session
from app.core.models import Funcionario, FuncionarioDTO
from app.funcionarios.repository import FuncionarioRepository

logger = structlog.get_logger()

DUPLICIDADE_CPF_LOGIN = "Já existe um funcionário cadastrado com o mesmo CPF ou login"


class FuncionarioService:
    """
    Gerenciamento de funcionários.

    A senha em texto puro só existe durante a chamada: é convertida com
    hash_password antes de chegar ao repositório e nunca entra nos logs.
    """

    def __init__(self, repository: FuncionarioRepository | None = None, session_factory=get_db_session):
        self.repository = repository or FuncionarioRepository()
        self._session = session_factory

    async def listar_todos(self) -> list[FuncionarioDTO]:
        logger.info("Listing employees")
        async with self._session() as session:
            funcionarios = await self.repository.listar_todos(session)
        return [f.to_dto() for f in funcionarios]

    async def listar_ativos(self) -> list[FuncionarioDTO]:
        logger.info("Listing active employees")
        async with self._session() as session:
            funcionarios = await self.repository.listar_ativos(session)
        return [f.to_dto() for f in funcionarios]

    async def buscar_por_id(self, funcionario_id: int) -> FuncionarioDTO:
        logger.info("Fetching employee", funcionario_id=funcionario_id)
        async with self._session() as session:
            funcionario = await self._obter(session, funcionario_id)
        return funcionario.to_dto()

    async def buscar_por_nome(self, nome: str) -> list[FuncionarioDTO]:
        logger.info("Searching employees by name", nome=nome)
        async with self._session() as session:
            funcionarios = await self.repository.buscar_por_nome(session, nome)
        return [f.to_dto() for f in funcionarios]

    async def buscar_por_cargo(self, cargo: str) -> list[FuncionarioDTO]:
        logger.info("Searching employees by role", cargo=cargo)
        async with self._session() as session:
            funcionarios = await self.repository.buscar_por_cargo(session, cargo)
        return [f.to_dto() for f in funcionarios]

    async def salvar(self, dto: FuncionarioDTO) -> FuncionarioDTO:
        logger.info("Saving employee", login=dto.login)
        try:
            async with self._session() as session:
                if await self.repository.buscar_por_cpf(session, dto.cpf):
                    raise BusinessError(f"Já existe um funcionário cadastrado com o CPF: {dto.cpf}")
                if await self.repository.buscar_por_login(session, dto.login):
                    raise BusinessError(f"Já existe um funcionário cadastrado com o login: {dto.login}")
                if not dto.senha:
                    raise BusinessError("A senha é obrigatória")

                funcionario = Funcionario.from_dto(dto, hash_password(dto.senha))
                await self.repository.inserir(session, funcionario)
        except IntegrityError as e:
            # CPF ou login gravado por outra requisição entre a consulta e o INSERT
            logger.warning("Employee unique constraint violated", login=dto.login, error=str(e.orig))
            raise BusinessError(DUPLICIDADE_CPF_LOGIN) from e
        return funcionario.to_dto()

    async def atualizar(self, funcionario_id: int, dto: FuncionarioDTO) -> FuncionarioDTO:
        logger.info("Updating employee", funcionario_id=funcionario_id, login=dto.login)
        try:
            async with self._session() as session:
                funcionario = await self._obter(session, funcionario_id)

                if funcionario.cpf != dto.cpf:
                    existente = await self.repository.buscar_por_cpf(session, dto.cpf)
                    if existente and existente.id != funcionario_id:
                        raise BusinessError(f"Já existe um funcionário cadastrado com o CPF: {dto.cpf}")

                if funcionario.login != dto.login:
                    existente = await self.repository.buscar_por_login(session, dto.login)
                    if existente and existente.id != funcionario_id:
                        raise BusinessError(f"Já existe um funcionário cadastrado com o login: {dto.login}")

                nova_credencial = hash_password(dto.senha) if dto.senha else None
                funcionario.update_from_dto(dto, nova_credencial)
                await self.repository.atualizar(session, funcionario)
        except IntegrityError as e:
            logger.warning(
                "Employee unique constraint violated",
                funcionario_id=funcionario_id, login=dto.login, error=str(e.orig),
            )
            raise BusinessError(DUPLICIDADE_CPF_LOGIN) from e
        return funcionario.to_dto()

    async def atualizar_senha(self, funcionario_id: int, senha_atual: str, nova_senha: str) -> None:
        logger.info("Updating employee password", funcionario_id=funcionario_id)
        async with self._session() as session:
            funcionario = await self._obter(session, funcionario_id)

            if not verify_password(senha_atual, funcionario.senha):
                logger.warning("Current password mismatch", funcionario_id=funcionario_id)
                raise BusinessError("Senha atual incorreta")

            funcionario.senha = hash_password(nova_senha)
            await self.repository.atualizar(session, funcionario)

    async def alterar_status(self, funcionario_id: int, ativo: bool) -> FuncionarioDTO:
        logger.info("Changing employee status", funcionario_id=funcionario_id, ativo=ativo)
        async with self._session() as session:
            funcionario = await self._obter(session, funcionario_id)
            funcionario.ativo = ativo
            await self.repository.atualizar(session, funcionario)
        return funcionario.to_dto()

    async def excluir(self, funcionario_id: int) -> bool:
        logger.info("Deleting employee", funcionario_id=funcionario_id)
        async with self._session() as session:
            await self._obter(session, funcionario_id)
            return await self.repository.deletar(session, funcionario_id)

    async def _obter(self, session, funcionario_id: int) -> Funcionario:
        funcionario = await self.repository.buscar_por_id(session, funcionario_id)
        if funcionario is None:
            raise NotFoundError(f"Funcionário não encontrado com o ID: {funcionario_id}")
        return funcionario


# Singleton
funcionario_service = FuncionarioService()
